"""
Pydantic schemas for data validation and serialization.

Schemas:
    dataset: Dataset create/update/response/filter models
    api: API endpoint request/response envelopes

Usage:
    from schemas.dataset import DatasetCreate, DatasetFilter
    from schemas.api import DatasetListResponse, HealthCheckResponse

Example:
    item = DatasetCreate(
        filename="expx.myfile1.root",
        run_number=100,
        total_event=1112,
        collision_energy=11275
    )
    assert item.collision_type is None
"""

__all__ = [
    "DatasetCreate",
    "DatasetUpdate",
    "DatasetResponse",
    "DatasetFilter",
    "DatasetListResponse",
    "HealthCheckResponse",
]
