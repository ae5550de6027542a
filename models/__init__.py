"""
SQLAlchemy ORM models for database tables.

Models:
    base: Base declarative class
    dataset: Dataset file catalog entries

Usage:
    from models.dataset import Dataset

Example:
    dataset = Dataset(
        filename="expx.myfile1.root",
        run_number=100,
        total_event=1112,
        collision_type="pp",
        data_type="data",
        collision_energy=11275
    )
    session.add(dataset)
    await session.commit()
"""

__all__ = [
    "Base",
    "Dataset",
]
