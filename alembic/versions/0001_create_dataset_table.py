"""create dataset table

Revision ID: 0001
Revises:
Create Date: 2024-01-15 10:00:00
"""

from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "dataset",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("filename", sa.String(length=255), nullable=False),
        sa.Column("run_number", sa.Integer(), nullable=False),
        sa.Column("total_event", sa.Integer(), nullable=False),
        sa.Column("collision_type", sa.Text(), nullable=True),
        sa.Column("data_type", sa.Text(), nullable=True),
        sa.Column("collision_energy", sa.Integer(), nullable=False),
        sa.UniqueConstraint("filename"),
    )


def downgrade():
    op.drop_table("dataset")
