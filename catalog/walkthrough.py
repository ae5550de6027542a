"""
End-to-end CRUD walkthrough over the dataset catalog.

Runs the classic sequence on an open session: insert two entries, query
everything, filter, update one row, delete one row. The caller owns the
session (and therefore closing it).
"""

from dataclasses import dataclass, field
from typing import Dict, List
from sqlalchemy.ext.asyncio import AsyncSession
from catalog.repository import DatasetRepository
from schemas.dataset import DatasetCreate
import logging

logger = logging.getLogger(__name__)

EXAMPLE_DATASETS = [
    DatasetCreate(
        filename="expx.myfile1.root",
        run_number=100,
        total_event=1112,
        collision_type="pp",
        data_type="data",
        collision_energy=11275
    ),
    DatasetCreate(
        filename="expx.myfile2.root",
        run_number=55,
        total_event=999,
        collision_type="pPb",
        data_type="mc",
        collision_energy=1127
    ),
]


@dataclass
class WalkthroughReport:
    inserted: List[str] = field(default_factory=list)
    all_filenames: List[str] = field(default_factory=list)
    pp_filenames: List[str] = field(default_factory=list)
    run_filenames: List[str] = field(default_factory=list)
    updated: Dict[str, int] = field(default_factory=dict)
    deleted: List[str] = field(default_factory=list)
    remaining_filenames: List[str] = field(default_factory=list)


async def run_walkthrough(session: AsyncSession) -> WalkthroughReport:
    repository = DatasetRepository(session)
    report = WalkthroughReport()
    first, second = EXAMPLE_DATASETS

    # Insert
    datasets = await repository.add_all(EXAMPLE_DATASETS)
    report.inserted = [d.filename for d in datasets]
    logger.info(f"Inserted: {report.inserted}")

    # Query
    report.all_filenames = [d.filename for d in await repository.list_all()]
    logger.info(f"All datasets: {report.all_filenames}")

    # Filter
    pp = await repository.filter({"collision_type": "pp"})
    report.pp_filenames = [d.filename for d in pp]
    logger.info(f"pp collisions: {report.pp_filenames}")

    by_run = await repository.filter({"run_number": second.run_number})
    report.run_filenames = [d.filename for d in by_run]
    logger.info(f"Run {second.run_number}: {report.run_filenames}")

    # Update
    target = await repository.get_by_filename(first.filename)
    updated = await repository.update(target.id, {"total_event": 2224})
    report.updated = {updated.filename: updated.total_event}
    logger.info(f"Updated: {report.updated}")

    # Delete
    doomed = await repository.get_by_filename(second.filename)
    await repository.delete(doomed.id)
    report.deleted = [second.filename]
    logger.info(f"Deleted: {report.deleted}")

    report.remaining_filenames = [d.filename for d in await repository.list_all()]
    return report
