import time

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from payslip_api.core.logging import get_logger
from payslip_api.db.session import get_session

router = APIRouter(prefix="/health", tags=["health"])
logger = get_logger(__name__)

STARTED_AT = time.monotonic()


def database_available(db: Session) -> bool:
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.warning("health_database_unreachable", error=type(exc).__name__)
        return False
    return True


@router.get("", summary="Liveness and readiness probe")
def healthcheck(response: Response, db: Session = Depends(get_session)) -> dict[str, object]:
    database = database_available(db)
    if not database:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "ok" if database else "degraded",
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "database": database,
    }
