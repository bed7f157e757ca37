"""
Health API Routes
"""
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.database import check_database_connection, database_health, get_db

router = APIRouter()


@router.get("/health")
def health_check(db: Session = Depends(get_db)) -> JSONResponse:
    """Application and database health"""
    database = database_health(db)
    ok = bool(database.get("ok")) and check_database_connection(db)
    return JSONResponse(
        status_code=status.HTTP_200_OK if ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if ok else "degraded",
            "database": database,
        },
    )
