from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime

from worksheet_viewer.domains.worksheets.entities import PaginationEnvelope


class PaginationResponse(BaseModel):
    """Метаданные пагинации"""
    current_page: int
    per_page: int
    total_pages: int
    total_items: int


class WorksheetListResponse(BaseModel):
    """Страница рабочих листов в исходной форме документов"""
    worksheets: List[Dict[str, Any]]
    pagination: PaginationResponse

    @classmethod
    def from_envelope(cls, envelope: PaginationEnvelope) -> "WorksheetListResponse":
        return cls(
            worksheets=[record.to_document() for record in envelope.items],
            pagination=PaginationResponse(
                current_page=envelope.current_page,
                per_page=envelope.per_page,
                total_pages=envelope.total_pages,
                total_items=envelope.total_items
            )
        )


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Тело ответа с ошибкой"""
    error: str
    details: Optional[str] = None
