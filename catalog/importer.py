"""
Bulk import of dataset catalog entries from CSV
"""

import pandas as pd
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from pydantic import ValidationError
from sqlalchemy import select
from core.config import settings
from core.exceptions import DatasetImportError
from catalog.repository import DatasetRepository
from models.dataset import Dataset
from schemas.dataset import DatasetCreate, REQUIRED_FIELDS
import logging

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    records_read: int = 0
    records_inserted: int = 0
    records_skipped: int = 0
    records_invalid: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records_read": self.records_read,
            "records_inserted": self.records_inserted,
            "records_skipped": self.records_skipped,
            "records_invalid": self.records_invalid,
            "errors": list(self.errors),
        }


class DatasetImporter:
    """
    Import datasets from a CSV file.

    Supports:
    - Header normalization (whitespace, case, spaces)
    - Per-row validation, invalid rows are counted and reported
    - Idempotent re-runs: filenames already in the catalog are skipped
    - Batched inserts
    """

    def __init__(self, db_session, batch_size: Optional[int] = None):
        self.db = db_session
        self.repository = DatasetRepository(db_session)
        self.batch_size = batch_size or settings.IMPORT_BATCH_SIZE

    def read_csv(self, file_path: Union[str, Path]) -> List[Dict[str, Any]]:
        """Read and normalize CSV rows"""
        path = Path(file_path)
        if not path.exists():
            raise DatasetImportError(
                "CSV file not found",
                context={"file_path": str(path)}
            )

        logger.info(f"Reading CSV from {path}")

        try:
            df = pd.read_csv(path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise DatasetImportError(
                "CSV file could not be parsed",
                context={"file_path": str(path)},
                original_exception=e
            )

        # Normalize column names (strip whitespace, lowercase)
        df.columns = df.columns.str.strip().str.lower().str.replace(' ', '_')

        missing = [column for column in REQUIRED_FIELDS if column not in df.columns]
        if missing:
            raise DatasetImportError(
                "CSV is missing required columns",
                context={"file_path": str(path), "missing_columns": missing}
            )

        for column in ("filename", "collision_type", "data_type"):
            if column in df.columns:
                df[column] = df[column].map(lambda v: str(v) if pd.notna(v) else None)

        # NaN -> None so optional columns become NULL; must run after the str mapping
        df = df.astype(object).where(pd.notna(df), None)
        records = df.to_dict(orient="records")

        logger.info(f"Read {len(records)} records from CSV")
        return records

    def validate(self, records: List[Dict[str, Any]], result: ImportResult) -> List[DatasetCreate]:
        """Validate rows, dropping invalid ones and in-file duplicates"""
        valid = []
        seen = set()

        for index, record in enumerate(records, start=1):
            try:
                item = DatasetCreate.model_validate(record)
            except ValidationError as e:
                result.records_invalid += 1
                result.errors.append(f"row {index}: {e.errors()[0]['loc'][0]}: {e.errors()[0]['msg']}")
                continue

            if item.filename in seen:
                result.records_skipped += 1
                continue
            seen.add(item.filename)
            valid.append(item)

        return valid

    async def import_records(self, records: List[Dict[str, Any]]) -> ImportResult:
        result = ImportResult(records_read=len(records))
        items = self.validate(records, result)

        if items:
            existing = await self._existing_filenames([item.filename for item in items])
            fresh = [item for item in items if item.filename not in existing]
            result.records_skipped += len(items) - len(fresh)

            for i in range(0, len(fresh), self.batch_size):
                batch = fresh[i:i + self.batch_size]
                inserted = await self.repository.add_all(batch)
                result.records_inserted += len(inserted)

                logger.info(f"Batch {i // self.batch_size + 1}: Inserted {len(inserted)} datasets")

        logger.info(
            f"Import finished: read={result.records_read}, inserted={result.records_inserted}, "
            f"skipped={result.records_skipped}, invalid={result.records_invalid}"
        )
        return result

    async def import_csv(self, file_path: Union[str, Path]) -> ImportResult:
        return await self.import_records(self.read_csv(file_path))

    async def _existing_filenames(self, filenames: List[str]) -> set:
        existing = set()
        # Chunked to stay under bind-parameter limits
        for i in range(0, len(filenames), 900):
            chunk = filenames[i:i + 900]
            result = await self.db.execute(
                select(Dataset.filename).where(Dataset.filename.in_(chunk))
            )
            existing.update(result.scalars().all())
        return existing
