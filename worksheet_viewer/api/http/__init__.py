from worksheet_viewer.api.http.health import router as health_router
from worksheet_viewer.api.http.worksheets import router as worksheets_router

__all__ = [
    "health_router",
    "worksheets_router"
]
