import io
from datetime import datetime, timezone

from rich.console import Console

from worksheet_viewer.client.api import ApiError
from worksheet_viewer.client.viewer import WorksheetViewer, format_date, short_title
from worksheet_viewer.domains.worksheets.normalization import normalize_document


class StubApi:
    def __init__(self, records=None, error=None):
        self.records = records or []
        self.error = error

    def get_worksheets(self, page=None, limit=None, search=None):
        if self.error:
            raise self.error
        return self.records


def make_viewer(api):
    console = Console(file=io.StringIO(), width=100, record=True)
    return WorksheetViewer(api, console=console), console


def rendered(console, renderable):
    console.print(renderable)
    return console.export_text()


def test_format_date():
    moment = datetime(2026, 3, 4, 9, 5, tzinfo=timezone.utc)
    assert format_date(moment) == "4/3/2026 9:05"
    assert format_date(moment, " at ") == "4/3/2026 at 9:05"


def test_short_title():
    assert short_title("Short") == "Short"
    assert short_title("A" * 25) == "A" * 20 + "..."


async def test_list_view_shows_loaded_worksheets():
    record = normalize_document({"_id": "1", "chatInput": "Algebra", "userEmail": "t@example.com"})
    viewer, console = make_viewer(StubApi([record]))

    await viewer.load()
    text = rendered(console, viewer.list_view())

    assert "Algebra" in text
    assert "t@example.com" in text
    assert viewer.select("1") is record
    assert viewer.select("2") is None


async def test_list_view_shows_error_with_retry():
    viewer, console = make_viewer(StubApi(error=ApiError("Error connecting to server: refused")))

    await viewer.load()
    text = rendered(console, viewer.list_view())

    assert "Error loading worksheets" in text
    assert "retry" in text
    assert viewer.select("1") is None


async def test_list_view_empty():
    viewer, console = make_viewer(StubApi([]))

    await viewer.load()

    assert "No worksheets found" in rendered(console, viewer.list_view())


def test_detail_view_renders_content():
    record = normalize_document({
        "chatInput": "Photosynthesis for grade five",
        "text": "<h2>Questions</h2><ul><li>What is light?</li></ul><script>x()</script>",
        "combined_at": "2026-10-01T08:30:00.000Z",
    })
    viewer, console = make_viewer(StubApi())

    text = rendered(console, viewer.detail_view(record))

    assert "Photosynthesis for g..." in text
    assert "Created: 1/10/2026 at 8:30" in text
    assert "• What is light?" in text
    assert "x()" not in text
