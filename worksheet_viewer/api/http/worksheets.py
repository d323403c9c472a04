from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, Dict, List, Optional

from worksheet_viewer.core.db import get_db
from worksheet_viewer.domains.worksheets.schemas import (
    WorksheetListResponse, MessageResponse, ErrorResponse
)
from worksheet_viewer.domains.worksheets.services import WorksheetService

router = APIRouter(tags=["worksheets"])

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def get_worksheet_service(db: AsyncSession = Depends(get_db)) -> WorksheetService:
    return WorksheetService(db)


@router.get("/worksheets", response_model=WorksheetListResponse)
async def list_worksheets(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    service: WorksheetService = Depends(get_worksheet_service)
):
    """Получение страницы рабочих листов с поиском"""
    envelope = await service.list_worksheets(page, limit, search)
    return WorksheetListResponse.from_envelope(envelope)


@router.get("/worksheets/subject/{subject}", response_model=List[Dict[str, Any]])
async def list_worksheets_by_subject(
    subject: str,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: WorksheetService = Depends(get_worksheet_service)
):
    """Получение рабочих листов по теме"""
    worksheets = await service.list_worksheets_by_subject(subject, page, limit)
    return [worksheet.to_document() for worksheet in worksheets]


@router.get("/worksheets/recent/{days}", response_model=List[Dict[str, Any]])
async def list_recent_worksheets(
    days: str,
    service: WorksheetService = Depends(get_worksheet_service)
):
    """Получение рабочих листов за последние N дней"""
    worksheets = await service.list_recent_worksheets(days)
    return [worksheet.to_document() for worksheet in worksheets]


@router.get("/worksheets/{worksheet_id}", response_model=Dict[str, Any], responses=ERROR_RESPONSES)
async def get_worksheet(
    worksheet_id: str,
    service: WorksheetService = Depends(get_worksheet_service)
):
    """Получение рабочего листа по идентификатору"""
    worksheet = await service.get_worksheet_by_id(worksheet_id)
    return worksheet.to_document()


@router.delete("/worksheets/{worksheet_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_worksheet(
    worksheet_id: str,
    service: WorksheetService = Depends(get_worksheet_service)
):
    """Удаление рабочего листа"""
    await service.delete_worksheet(worksheet_id)
    return MessageResponse(message="Worksheet deleted successfully")


@router.get("/subjects", response_model=List[str])
async def list_subjects(service: WorksheetService = Depends(get_worksheet_service)):
    """Получение отсортированного списка тем"""
    return await service.list_distinct_subjects()
