"""
Pydantic schemas for API request/response models
"""

from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Dict, Any
from datetime import datetime, timezone
from schemas.dataset import DatasetResponse, DatasetFilter, DatasetUpdate


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ============================================================================
# Health Check Schemas
# ============================================================================

class HealthCheckResponse(BaseModel):
    """Health check response model"""
    status: str = Field("healthy", description="Overall system status: healthy or unhealthy")
    timestamp: datetime = Field(default_factory=_utcnow)
    database_connected: bool
    total_datasets: Optional[int] = None

    @model_validator(mode="after")
    def determine_status(self):
        """Unhealthy whenever the database is unreachable"""
        self.status = "healthy" if self.database_connected else "unhealthy"
        return self

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "healthy",
                "timestamp": "2024-01-15T10:30:00Z",
                "database_connected": True,
                "total_datasets": 42
            }
        }
    }


# ============================================================================
# Dataset Listing Schemas
# ============================================================================

class PaginationMetadata(BaseModel):
    """Pagination metadata"""
    current_page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_items: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)
    has_next: bool
    has_previous: bool


class DatasetListResponse(BaseModel):
    """Paginated dataset listing"""
    request_id: Optional[str] = None
    items: List[DatasetResponse]
    pagination: PaginationMetadata
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


# ============================================================================
# Mutation Schemas
# ============================================================================

class BulkUpdateRequest(BaseModel):
    """Update every dataset matching ``criteria`` with ``changes``"""
    criteria: DatasetFilter
    changes: DatasetUpdate


class BulkUpdateResponse(BaseModel):
    updated: int
    filters_applied: Dict[str, Any] = Field(default_factory=dict)


class DeleteResponse(BaseModel):
    deleted: int
    dataset_id: Optional[int] = None


class ImportRequest(BaseModel):
    """Server-side CSV file to import"""
    file_path: str = Field(..., min_length=1)


class ImportResponse(BaseModel):
    records_read: int
    records_inserted: int
    records_skipped: int
    records_invalid: int
    errors: List[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error_type: str
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)
    timestamp: datetime
    original_error: Optional[str] = None
