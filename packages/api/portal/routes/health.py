# This project was developed with assistance from AI tools.
"""Liveness and database health probe."""

from db import DatabaseService, get_db_service
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from ..core.config import settings

router = APIRouter()


@router.get("/")
async def health(db: DatabaseService = Depends(get_db_service)) -> JSONResponse:
    """Report service and database health; 503 when the database is unreachable."""
    db_ok = await db.health_check()
    return JSONResponse(
        status_code=status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if db_ok else "degraded",
            "service": settings.APP_NAME,
            "database": "ok" if db_ok else "unavailable",
        },
    )
