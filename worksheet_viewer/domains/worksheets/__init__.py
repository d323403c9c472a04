from worksheet_viewer.domains.worksheets.entities import WorksheetRecord, PaginationEnvelope
from worksheet_viewer.domains.worksheets.normalization import normalize_document
from worksheet_viewer.domains.worksheets.queries import (
    WorksheetQuery, build_list_query, build_subject_query, build_recent_query
)
from worksheet_viewer.domains.worksheets.schemas import (
    PaginationResponse, WorksheetListResponse, HealthResponse,
    MessageResponse, ErrorResponse
)
from worksheet_viewer.domains.worksheets.services import WorksheetService

__all__ = [
    "WorksheetRecord", "PaginationEnvelope",
    "normalize_document",
    "WorksheetQuery", "build_list_query", "build_subject_query", "build_recent_query",
    "PaginationResponse", "WorksheetListResponse", "HealthResponse",
    "MessageResponse", "ErrorResponse",
    "WorksheetService"
]
