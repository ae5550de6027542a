"""
Pydantic schemas for dataset catalog entries with validation
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
import math
from typing import Optional

# Columns that must never be set to NULL
REQUIRED_FIELDS = ("filename", "run_number", "total_event", "collision_energy")


def _clean_optional_text(v):
    if v is None or (isinstance(v, float) and math.isnan(v)):
        return None
    v = str(v).strip()
    return v or None


class DatasetCreate(BaseModel):
    """
    Schema for creating dataset entries.

    Ensures:
    - Required columns are present
    - Counters are non-negative
    - Free-text columns are stripped, blanks stored as NULL
    """

    filename: str = Field(..., min_length=1, max_length=255)
    run_number: int = Field(..., ge=0)
    total_event: int = Field(..., ge=0)
    collision_type: Optional[str] = None
    data_type: Optional[str] = None
    collision_energy: int = Field(..., ge=0)

    @field_validator("filename")
    @classmethod
    def clean_filename(cls, v):
        """Strip surrounding whitespace from filename"""
        v = v.strip()
        if not v:
            raise ValueError("filename cannot be empty after stripping")
        return v

    @field_validator("collision_type", "data_type", mode="before")
    @classmethod
    def clean_text(cls, v):
        return _clean_optional_text(v)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "filename": "expx.myfile1.root",
                "run_number": 100,
                "total_event": 1112,
                "collision_type": "pp",
                "data_type": "data",
                "collision_energy": 11275
            }
        }
    )


class DatasetUpdate(BaseModel):
    """
    Partial update. Only fields explicitly provided are applied.
    """

    filename: Optional[str] = Field(None, min_length=1, max_length=255)
    run_number: Optional[int] = Field(None, ge=0)
    total_event: Optional[int] = Field(None, ge=0)
    collision_type: Optional[str] = None
    data_type: Optional[str] = None
    collision_energy: Optional[int] = Field(None, ge=0)

    @field_validator(*REQUIRED_FIELDS)
    @classmethod
    def reject_null_required(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError(f"{info.field_name} cannot be empty")
        return v

    @field_validator("collision_type", "data_type", mode="before")
    @classmethod
    def clean_text(cls, v):
        return _clean_optional_text(v)

    def changes(self) -> dict:
        """Fields the caller actually set"""
        return self.model_dump(exclude_unset=True)


class DatasetResponse(DatasetCreate):
    """Schema for API responses"""
    id: int

    model_config = ConfigDict(from_attributes=True)


class DatasetFilter(BaseModel):
    """
    Query criteria. Unset fields do not filter.
    """

    filename: Optional[str] = None
    filename_contains: Optional[str] = None
    run_number: Optional[int] = None
    min_run_number: Optional[int] = None
    max_run_number: Optional[int] = None
    collision_type: Optional[str] = None
    data_type: Optional[str] = None
    collision_energy: Optional[int] = None
    min_total_event: Optional[int] = Field(None, ge=0)
    max_total_event: Optional[int] = Field(None, ge=0)

    @field_validator("filename", "filename_contains", "collision_type", "data_type", mode="before")
    @classmethod
    def blank_is_unset(cls, v):
        """Blank strings add no condition, so they must not count as a filter"""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def applied(self) -> dict:
        return self.model_dump(exclude_none=True)

    def is_empty(self) -> bool:
        return not self.applied()
