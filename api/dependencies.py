"""
FastAPI dependencies
"""

from typing import AsyncGenerator
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession
from core.database import get_session
from catalog.repository import DatasetRepository


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async for session in get_session():
        yield session


def get_repository(db: AsyncSession = Depends(get_db)) -> DatasetRepository:
    return DatasetRepository(db)
