from datetime import datetime, timezone

from fastapi import APIRouter

from worksheet_viewer.domains.worksheets.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Проверка работоспособности сервиса"""
    return HealthResponse(status="OK", timestamp=datetime.now(timezone.utc))
