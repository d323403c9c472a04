from worksheet_viewer.client.api import ApiError, WorksheetApiClient
from worksheet_viewer.client.render import render_blocks, render_content
from worksheet_viewer.client.state import ListState, WorksheetListModel

__all__ = [
    "ApiError", "WorksheetApiClient",
    "render_blocks", "render_content",
    "ListState", "WorksheetListModel"
]
