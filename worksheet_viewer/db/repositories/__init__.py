from worksheet_viewer.db.repositories.worksheet_repository import WorksheetRepository

__all__ = [
    "WorksheetRepository"
]
