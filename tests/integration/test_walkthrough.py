"""
Integration test for the end-to-end CRUD walkthrough
"""

import pytest
from catalog.repository import DatasetRepository
from catalog.walkthrough import run_walkthrough
from core.database import session_scope
from core.exceptions import DuplicateFilenameError


@pytest.mark.asyncio
async def test_walkthrough_steps(db_session):
    report = await run_walkthrough(db_session)

    assert report.inserted == ["expx.myfile1.root", "expx.myfile2.root"]
    assert report.all_filenames == ["expx.myfile1.root", "expx.myfile2.root"]
    assert report.pp_filenames == ["expx.myfile1.root"]
    assert report.run_filenames == ["expx.myfile2.root"]
    assert report.updated == {"expx.myfile1.root": 2224}
    assert report.deleted == ["expx.myfile2.root"]
    assert report.remaining_filenames == ["expx.myfile1.root"]


@pytest.mark.asyncio
async def test_walkthrough_in_session_scope(session_factory):
    async with session_scope(session_factory) as session:
        await run_walkthrough(session)

    async with session_factory() as session:
        remaining = await DatasetRepository(session).list_all()

    assert [(d.filename, d.total_event) for d in remaining] == [("expx.myfile1.root", 2224)]


@pytest.mark.asyncio
async def test_walkthrough_rerun_hits_unique_filename(db_session):
    await run_walkthrough(db_session)

    with pytest.raises(DuplicateFilenameError):
        await run_walkthrough(db_session)
