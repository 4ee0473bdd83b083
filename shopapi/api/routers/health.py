# shopapi/api/routers/health.py
from datetime import datetime, timezone

from fastapi import APIRouter, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError

from shopapi.domain.schemas import HealthOut
from shopapi.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])


@router.get("/health", response_model=HealthOut)
def health(request: Request):
    try:
        request.app.state.database.ping()
    except SQLAlchemyError as e:
        logger.error(f"Health check failed: {e}")
        raise HTTPException(status_code=503, detail="Database unavailable")
    return HealthOut(status="ok", database="ok", timestamp=datetime.now(timezone.utc))
