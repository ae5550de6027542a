"""
Health check endpoint with database status
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func, text
from sqlalchemy.exc import SQLAlchemyError
from api.dependencies import get_db
from schemas.api import HealthCheckResponse
from models.dataset import Dataset
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(db: AsyncSession = Depends(get_db)):
    """
    Health check endpoint.

    Returns:
    - Database connectivity status
    - Number of catalogued datasets
    """
    db_connected = False
    total_datasets = None

    try:
        await db.execute(text("SELECT 1"))
        db_connected = True
    except SQLAlchemyError as e:
        logger.error(f"Database connection failed: {str(e)}")

    if db_connected:
        try:
            result = await db.execute(select(func.count()).select_from(Dataset))
            total_datasets = result.scalar()
        except SQLAlchemyError as e:
            logger.error(f"Failed to count datasets: {str(e)}")

    return HealthCheckResponse(
        database_connected=db_connected,
        total_datasets=total_datasets
    )
