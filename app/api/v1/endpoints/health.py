from fastapi import APIRouter

from app.core.clock import isoformat_ms, utc_now
from app.schemas.payload import HealthStatus

router = APIRouter()


@router.get("/health", response_model=HealthStatus)
def health_check():
    return HealthStatus(timestamp=isoformat_ms(utc_now()))
