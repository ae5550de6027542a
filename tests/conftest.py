"""
Pytest configuration and fixtures
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from models.base import Base
from models.dataset import Dataset
from typing import AsyncGenerator

# In-memory SQLite shared across the single pooled connection
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Drop all tables after test
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture(scope="function")
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for tests"""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def dataset_rows():
    """Example catalog rows"""
    return [
        {
            "filename": "expx.myfile1.root",
            "run_number": 100,
            "total_event": 1112,
            "collision_type": "pp",
            "data_type": "data",
            "collision_energy": 11275
        },
        {
            "filename": "expx.myfile2.root",
            "run_number": 55,
            "total_event": 999,
            "collision_type": "pPb",
            "data_type": "mc",
            "collision_energy": 1127
        },
        {
            "filename": "expx.myfile3.root",
            "run_number": 101,
            "total_event": 25000,
            "collision_type": "pp",
            "data_type": "data",
            "collision_energy": 13000
        },
    ]


@pytest_asyncio.fixture
async def seeded_session(db_session, dataset_rows) -> AsyncSession:
    """Session with ``dataset_rows`` already committed"""
    db_session.add_all([Dataset(**row) for row in dataset_rows])
    await db_session.commit()
    return db_session


@pytest.fixture
def csv_file(tmp_path):
    """CSV with messy headers, a blank optional column and one row missing run_number"""
    path = tmp_path / "datasets.csv"
    path.write_text(
        "Filename, Run Number ,Total Event,Collision Type,Data Type,Collision Energy\n"
        "expx.myfile1.root,100,1112,pp,data,11275\n"
        "expx.myfile2.root,55,999,pPb,mc,1127\n"
        "expx.myfile4.root,102,18000,,mc,5020\n"
        "expx.broken.root,,10,pp,data,13000\n"
    )
    return path
