from worksheet_viewer.db.models.worksheet import (
    Worksheet, SUBJECT_FIELD, CONTENT_FIELD, CREATED_AT_FIELD
)

__all__ = [
    "Worksheet",
    "SUBJECT_FIELD",
    "CONTENT_FIELD",
    "CREATED_AT_FIELD"
]
