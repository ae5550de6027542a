"""
CRUD operations on the dataset catalog
"""

from typing import Any, Dict, Iterable, List, Optional, Union
from pydantic import ValidationError
from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from models.dataset import Dataset
from schemas.dataset import DatasetCreate, DatasetFilter, DatasetUpdate
from core.exceptions import (
    DatabaseConnectionError,
    DatabaseError,
    DatasetNotFoundError,
    DatasetValidationError,
    DuplicateFilenameError,
)
import logging

logger = logging.getLogger(__name__)

SORTABLE_COLUMNS = {column.name for column in Dataset.__table__.columns}

CreateInput = Union[DatasetCreate, Dict[str, Any]]
UpdateInput = Union[DatasetUpdate, Dict[str, Any]]
FilterInput = Union[DatasetFilter, Dict[str, Any], None]


def _validation_error(exc: ValidationError) -> DatasetValidationError:
    errors = exc.errors()
    first = errors[0] if errors else {}
    return DatasetValidationError(
        "Invalid dataset fields",
        context={
            "field_name": ".".join(str(p) for p in first.get("loc", ())),
            "errors": [f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in errors],
        },
        original_exception=exc
    )


def _as_create(data: CreateInput) -> DatasetCreate:
    if isinstance(data, DatasetCreate):
        return data
    try:
        return DatasetCreate.model_validate(data)
    except ValidationError as e:
        raise _validation_error(e)


def _as_changes(changes: UpdateInput) -> Dict[str, Any]:
    if not isinstance(changes, DatasetUpdate):
        try:
            changes = DatasetUpdate.model_validate(changes)
        except ValidationError as e:
            raise _validation_error(e)
    values = changes.changes()
    if not values:
        raise DatasetValidationError("No fields to update")
    return values


def _as_filter(criteria: FilterInput) -> DatasetFilter:
    if criteria is None:
        return DatasetFilter()
    if isinstance(criteria, DatasetFilter):
        return criteria
    try:
        return DatasetFilter.model_validate(criteria)
    except ValidationError as e:
        raise _validation_error(e)


def build_conditions(criteria: DatasetFilter) -> List[Any]:
    """Translate filter criteria into SQLAlchemy WHERE clauses"""
    conditions = []

    if criteria.filename is not None:
        conditions.append(Dataset.filename == criteria.filename)

    if criteria.filename_contains is not None:
        conditions.append(Dataset.filename.contains(criteria.filename_contains, autoescape=True))

    if criteria.run_number is not None:
        conditions.append(Dataset.run_number == criteria.run_number)

    if criteria.min_run_number is not None:
        conditions.append(Dataset.run_number >= criteria.min_run_number)

    if criteria.max_run_number is not None:
        conditions.append(Dataset.run_number <= criteria.max_run_number)

    if criteria.collision_type is not None:
        conditions.append(Dataset.collision_type == criteria.collision_type)

    if criteria.data_type is not None:
        conditions.append(Dataset.data_type == criteria.data_type)

    if criteria.collision_energy is not None:
        conditions.append(Dataset.collision_energy == criteria.collision_energy)

    if criteria.min_total_event is not None:
        conditions.append(Dataset.total_event >= criteria.min_total_event)

    if criteria.max_total_event is not None:
        conditions.append(Dataset.total_event <= criteria.max_total_event)

    return conditions


class DatasetRepository:
    """
    Async data access for the ``dataset`` table.

    Ensures:
    - Every mutation commits, or rolls back and raises a CatalogException
    - Unique filename violations surface as DuplicateFilenameError
    - Lookups by primary key raise DatasetNotFoundError where a row is required
    """

    def __init__(self, db_session: AsyncSession):
        self.db = db_session

    # ------------------------------------------------------------------
    # Insert
    # ------------------------------------------------------------------

    async def add(self, data: CreateInput) -> Dataset:
        """
        Insert one dataset.

        Raises:
            DuplicateFilenameError: filename already catalogued
        """
        item = _as_create(data)
        dataset = Dataset(**item.model_dump())
        self.db.add(dataset)
        await self._commit("INSERT", filename=item.filename)

        logger.info(f"Inserted dataset id={dataset.id} filename={dataset.filename}")
        return dataset

    async def add_all(self, items: Iterable[CreateInput]) -> List[Dataset]:
        """
        Insert several datasets in one transaction.

        A duplicate filename aborts the whole batch.
        """
        datasets = [Dataset(**_as_create(item).model_dump()) for item in items]
        if not datasets:
            return []

        self.db.add_all(datasets)
        await self._commit("INSERT")

        logger.info(f"Inserted {len(datasets)} datasets")
        return datasets

    # ------------------------------------------------------------------
    # Select
    # ------------------------------------------------------------------

    async def get(self, dataset_id: int) -> Optional[Dataset]:
        return await self._run(self.db.get(Dataset, dataset_id), "SELECT")

    async def get_or_raise(self, dataset_id: int) -> Dataset:
        dataset = await self.get(dataset_id)
        if dataset is None:
            raise DatasetNotFoundError(
                f"Dataset {dataset_id} not found",
                context={"dataset_id": dataset_id}
            )
        return dataset

    async def get_by_filename(self, filename: str) -> Optional[Dataset]:
        result = await self._run(
            self.db.execute(select(Dataset).where(Dataset.filename == filename)),
            "SELECT"
        )
        return result.scalars().first()

    async def list_all(self) -> List[Dataset]:
        result = await self._run(
            self.db.execute(select(Dataset).order_by(Dataset.id)),
            "SELECT"
        )
        return list(result.scalars().all())

    # ------------------------------------------------------------------
    # Filter
    # ------------------------------------------------------------------

    async def filter(
        self,
        criteria: FilterInput = None,
        offset: int = 0,
        limit: Optional[int] = None,
        order_by: str = "id",
        descending: bool = False
    ) -> List[Dataset]:
        """
        Return datasets matching ``criteria``.

        Args:
            criteria: DatasetFilter (or dict of its fields)
            offset: Rows to skip
            limit: Maximum rows to return (None for all)
            order_by: Column name to sort on
            descending: Reverse sort order
        """
        if order_by not in SORTABLE_COLUMNS:
            raise DatasetValidationError(
                f"Cannot order by {order_by}",
                context={"field_name": "order_by", "field_value": order_by}
            )
        if offset < 0 or (limit is not None and limit < 0):
            raise DatasetValidationError(
                "offset and limit must be non-negative",
                context={"offset": offset, "limit": limit}
            )

        conditions = build_conditions(_as_filter(criteria))

        column = getattr(Dataset, order_by)
        query = select(Dataset).where(*conditions)
        query = query.order_by(column.desc() if descending else column.asc())
        if order_by != "id":
            query = query.order_by(Dataset.id)
        query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)

        result = await self._run(self.db.execute(query), "SELECT")
        return list(result.scalars().all())

    async def count(self, criteria: FilterInput = None) -> int:
        conditions = build_conditions(_as_filter(criteria))
        query = select(func.count()).select_from(Dataset).where(*conditions)
        result = await self._run(self.db.execute(query), "SELECT")
        return result.scalar() or 0

    # ------------------------------------------------------------------
    # Update
    # ------------------------------------------------------------------

    async def update(self, dataset_id: int, changes: UpdateInput) -> Dataset:
        """
        Apply ``changes`` to one dataset and commit.

        Raises:
            DatasetNotFoundError: no row with this id
            DuplicateFilenameError: new filename already catalogued
        """
        values = _as_changes(changes)
        dataset = await self.get_or_raise(dataset_id)

        for field, value in values.items():
            setattr(dataset, field, value)

        await self._commit("UPDATE", dataset_id=dataset_id, filename=values.get("filename"))

        logger.info(f"Updated dataset id={dataset_id} fields={sorted(values)}")
        return dataset

    async def update_where(
        self,
        criteria: FilterInput,
        changes: UpdateInput,
        allow_all: bool = False
    ) -> int:
        """
        Bulk UPDATE every row matching ``criteria``.

        An empty filter is refused unless ``allow_all`` is set.

        Returns:
            Number of rows updated
        """
        values = _as_changes(changes)
        criteria = _as_filter(criteria)
        self._guard_unfiltered(criteria, allow_all, "UPDATE")

        stmt = (
            update(Dataset)
            .where(*build_conditions(criteria))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = await self._run(self.db.execute(stmt), "UPDATE")
        await self._commit("UPDATE", filename=values.get("filename"))
        # Loaded instances may be stale after a bulk statement
        self.db.expire_all()

        logger.info(f"Bulk updated {result.rowcount} datasets filters={criteria.applied()}")
        return result.rowcount

    # ------------------------------------------------------------------
    # Delete
    # ------------------------------------------------------------------

    async def delete(self, dataset_id: int) -> None:
        dataset = await self.get_or_raise(dataset_id)
        await self.db.delete(dataset)
        await self._commit("DELETE", dataset_id=dataset_id)

        logger.info(f"Deleted dataset id={dataset_id}")

    async def delete_where(self, criteria: FilterInput, allow_all: bool = False) -> int:
        """Bulk DELETE every row matching ``criteria``; returns rows deleted"""
        criteria = _as_filter(criteria)
        self._guard_unfiltered(criteria, allow_all, "DELETE")

        stmt = (
            delete(Dataset)
            .where(*build_conditions(criteria))
            .execution_options(synchronize_session=False)
        )
        result = await self._run(self.db.execute(stmt), "DELETE")
        await self._commit("DELETE")
        self.db.expire_all()

        logger.info(f"Deleted {result.rowcount} datasets filters={criteria.applied()}")
        return result.rowcount

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _guard_unfiltered(criteria: DatasetFilter, allow_all: bool, operation: str):
        if criteria.is_empty() and not allow_all:
            raise DatasetValidationError(
                f"Refusing unfiltered {operation}; pass allow_all=True",
                context={"operation": operation}
            )

    async def _run(self, awaitable, operation: str):
        try:
            return await awaitable
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._translate(e, operation)

    async def _commit(self, operation: str, **context):
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise self._translate(e, operation, **context)

    @staticmethod
    def _translate(exc: SQLAlchemyError, operation: str, **context):
        context = {k: v for k, v in context.items() if v is not None}
        context.update(operation=operation, table_name=Dataset.__tablename__)

        if isinstance(exc, IntegrityError):
            detail = str(exc.orig).lower()
            if "unique" in detail or "duplicate" in detail:
                return DuplicateFilenameError(
                    "Dataset filename already exists",
                    context=context,
                    original_exception=exc
                )
            return DatabaseError("Constraint violation", context=context, original_exception=exc)

        if isinstance(exc, OperationalError):
            return DatabaseConnectionError("Database unavailable", context=context, original_exception=exc)

        return DatabaseError(f"{operation} failed", context=context, original_exception=exc)
