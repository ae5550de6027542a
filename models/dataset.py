from typing import Any, Dict
from sqlalchemy import Column, Integer, String, Text
from models.base import Base


class Dataset(Base):
    """
    One catalog entry per dataset file.

    Conventional values:
    - collision_type: "pp", "PbPb", "pPb", "ee"
    - data_type: "data" (recorded) or "mc" (simulated)
    - collision_energy: centre-of-mass energy in GeV
    """
    __tablename__ = "dataset"

    id = Column(Integer, primary_key=True, autoincrement=True)
    filename = Column(String(255), unique=True, nullable=False)
    run_number = Column(Integer, nullable=False)
    total_event = Column(Integer, nullable=False)
    collision_type = Column(Text, nullable=True)
    data_type = Column(Text, nullable=True)
    collision_energy = Column(Integer, nullable=False)

    def __repr__(self):
        return f"Dataset(id={self.id} filename={self.filename})"

    def to_dict(self) -> Dict[str, Any]:
        return {column.name: getattr(self, column.name) for column in self.__table__.columns}
