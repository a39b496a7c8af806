import logging

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from src.domain.base import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


def database_type(engine: AsyncEngine) -> str:
    return {"postgresql": "PostgreSQL", "sqlite": "SQLite"}.get(
        engine.dialect.name, engine.dialect.name
    )


async def check_database(engine: AsyncEngine) -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True
    except (SQLAlchemyError, OSError) as e:
        logger.warning(f"Database check failed: {e}")
        return False


@router.get("/health")
async def health():
    """
    Liveness check, no authentication.

    Reports database connectivity from a SELECT 1 round trip.
    """
    from src.depends import engine

    connected = await check_database(engine)
    return {
        "status": "healthy" if connected else "degraded",
        "database": "connected" if connected else "disconnected",
        "type": database_type(engine),
        "timestamp": utcnow().isoformat() + "Z",
    }
