"""
Dataset catalog CRUD endpoints
"""

from fastapi import APIRouter, Depends, Query, Request, status
from typing import Optional
from catalog.importer import DatasetImporter
from catalog.repository import DatasetRepository
from api.dependencies import get_repository
from core.exceptions import DatasetNotFoundError
from core.config import settings
from schemas.api import (
    BulkUpdateRequest,
    BulkUpdateResponse,
    DatasetListResponse,
    DeleteResponse,
    ImportRequest,
    ImportResponse,
    PaginationMetadata,
)
from schemas.dataset import DatasetCreate, DatasetFilter, DatasetResponse, DatasetUpdate
import math
import uuid
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/datasets", tags=["Datasets"])


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", f"req_{uuid.uuid4().hex[:12]}")


@router.post("", response_model=DatasetResponse, status_code=status.HTTP_201_CREATED)
async def create_dataset(
    request: Request,
    payload: DatasetCreate,
    repository: DatasetRepository = Depends(get_repository)
):
    """Insert a dataset entry"""
    logger.info(f"[{_request_id(request)}] POST /datasets filename={payload.filename}")
    dataset = await repository.add(payload)
    return DatasetResponse.model_validate(dataset)


@router.get("", response_model=DatasetListResponse)
async def list_datasets(
    request: Request,
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE, description="Items per page"),
    filename: Optional[str] = Query(None, description="Exact filename"),
    filename_contains: Optional[str] = Query(None, description="Substring of filename"),
    run_number: Optional[int] = Query(None, description="Filter by run number"),
    min_run_number: Optional[int] = Query(None, description="Minimum run number"),
    max_run_number: Optional[int] = Query(None, description="Maximum run number"),
    collision_type: Optional[str] = Query(None, description="Filter by collision type"),
    data_type: Optional[str] = Query(None, description="Filter by data type"),
    collision_energy: Optional[int] = Query(None, description="Filter by collision energy (GeV)"),
    min_total_event: Optional[int] = Query(None, ge=0, description="Minimum number of events"),
    max_total_event: Optional[int] = Query(None, ge=0, description="Maximum number of events"),
    order_by: str = Query("id", description="Column to sort on"),
    descending: bool = Query(False, description="Sort descending"),
    repository: DatasetRepository = Depends(get_repository)
):
    """
    Retrieve paginated and filtered datasets.

    Features:
    - Pagination
    - Equality, substring and range filters
    - Sorting on any column
    """
    request_id = _request_id(request)
    criteria = DatasetFilter(
        filename=filename,
        filename_contains=filename_contains,
        run_number=run_number,
        min_run_number=min_run_number,
        max_run_number=max_run_number,
        collision_type=collision_type,
        data_type=data_type,
        collision_energy=collision_energy,
        min_total_event=min_total_event,
        max_total_event=max_total_event,
    )

    logger.info(
        f"[{request_id}] GET /datasets - page={page}, page_size={page_size}, "
        f"filters={criteria.applied()}"
    )

    total_items = await repository.count(criteria)
    total_pages = math.ceil(total_items / page_size) if total_items > 0 else 0

    datasets = await repository.filter(
        criteria,
        offset=(page - 1) * page_size,
        limit=page_size,
        order_by=order_by,
        descending=descending,
    )

    logger.info(f"[{request_id}] Returned {len(datasets)} datasets")

    return DatasetListResponse(
        request_id=request_id,
        items=[DatasetResponse.model_validate(d) for d in datasets],
        pagination=PaginationMetadata(
            current_page=page,
            page_size=page_size,
            total_items=total_items,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_previous=page > 1
        ),
        filters_applied=criteria.applied()
    )


@router.patch("", response_model=BulkUpdateResponse)
async def bulk_update_datasets(
    request: Request,
    payload: BulkUpdateRequest,
    repository: DatasetRepository = Depends(get_repository)
):
    """Update every dataset matching the criteria"""
    logger.info(f"[{_request_id(request)}] PATCH /datasets filters={payload.criteria.applied()}")
    updated = await repository.update_where(payload.criteria, payload.changes)
    return BulkUpdateResponse(updated=updated, filters_applied=payload.criteria.applied())


@router.post("/import", response_model=ImportResponse)
async def import_datasets(
    request: Request,
    payload: ImportRequest,
    repository: DatasetRepository = Depends(get_repository)
):
    """Import datasets from a CSV file readable by the server"""
    logger.info(f"[{_request_id(request)}] POST /datasets/import file_path={payload.file_path}")
    importer = DatasetImporter(repository.db)
    result = await importer.import_csv(payload.file_path)
    return ImportResponse(**result.to_dict())


@router.get("/by-filename/{filename:path}", response_model=DatasetResponse)
async def get_dataset_by_filename(
    filename: str,
    repository: DatasetRepository = Depends(get_repository)
):
    dataset = await repository.get_by_filename(filename)
    if dataset is None:
        raise DatasetNotFoundError(
            f"Dataset {filename} not found",
            context={"filename": filename}
        )
    return DatasetResponse.model_validate(dataset)


@router.get("/{dataset_id}", response_model=DatasetResponse)
async def get_dataset(
    dataset_id: int,
    repository: DatasetRepository = Depends(get_repository)
):
    dataset = await repository.get_or_raise(dataset_id)
    return DatasetResponse.model_validate(dataset)


@router.patch("/{dataset_id}", response_model=DatasetResponse)
async def update_dataset(
    request: Request,
    dataset_id: int,
    payload: DatasetUpdate,
    repository: DatasetRepository = Depends(get_repository)
):
    logger.info(f"[{_request_id(request)}] PATCH /datasets/{dataset_id} fields={sorted(payload.changes())}")
    dataset = await repository.update(dataset_id, payload)
    return DatasetResponse.model_validate(dataset)


@router.delete("/{dataset_id}", response_model=DeleteResponse)
async def delete_dataset(
    request: Request,
    dataset_id: int,
    repository: DatasetRepository = Depends(get_repository)
):
    logger.info(f"[{_request_id(request)}] DELETE /datasets/{dataset_id}")
    await repository.delete(dataset_id)
    return DeleteResponse(deleted=1, dataset_id=dataset_id)
