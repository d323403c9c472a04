import json

import pytest
import requests

from worksheet_viewer.client.api import ApiError, WorksheetApiClient
from worksheet_viewer.domains.worksheets.normalization import UNKNOWN_SUBJECT


def make_response(status_code=200, payload=None, body=None):
    response = requests.Response()
    response.status_code = status_code
    if body is None:
        body = json.dumps(payload).encode()
    response._content = body
    response.url = "http://api.test/worksheets"
    return response


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error:
            raise self.error
        return self.response


def test_get_worksheets_normalizes_envelope():
    payload = {
        "worksheets": [
            {"_id": "1", "chatInput": "Algebra", "text": "<p>a</p>", "combined_at": "2026-10-01T00:00:00.000Z"},
            {"_id": "2", "subject": "Biology", "htmlOutput": "<p>b</p>"},
            {"_id": "3"},
        ],
        "pagination": {"current_page": 1, "per_page": 50, "total_pages": 1, "total_items": 3},
    }
    session = FakeSession(make_response(payload=payload))
    api = WorksheetApiClient("http://api.test/", session=session, timeout=3)

    records = api.get_worksheets(search="bio")

    assert [record.subject for record in records] == ["Algebra", "Biology", UNKNOWN_SUBJECT]
    assert [record.id for record in records] == ["1", "2", "3"]
    assert records[1].created_at_defaulted is True
    assert session.calls == [{"url": "http://api.test/worksheets", "params": {"search": "bio"}, "timeout": 3}]


def test_get_worksheets_accepts_bare_list():
    session = FakeSession(make_response(payload=[{"_id": "1", "chatInput": "A"}]))
    api = WorksheetApiClient("http://api.test", session=session)

    assert [record.subject for record in api.get_worksheets()] == ["A"]


def test_http_error_status():
    session = FakeSession(make_response(status_code=500, payload={"error": "boom"}))
    api = WorksheetApiClient("http://api.test", session=session)

    with pytest.raises(ApiError, match="500"):
        api.get_worksheets()


def test_connection_error():
    session = FakeSession(error=requests.ConnectionError("refused"))
    api = WorksheetApiClient("http://api.test", session=session)

    with pytest.raises(ApiError, match="Error connecting to server"):
        api.get_worksheets()


def test_invalid_json():
    session = FakeSession(make_response(body=b"<html>proxy error</html>"))
    api = WorksheetApiClient("http://api.test", session=session)

    with pytest.raises(ApiError, match="Invalid response"):
        api.get_worksheets()


def test_unexpected_shape():
    session = FakeSession(make_response(payload={"worksheets": "nope"}))
    api = WorksheetApiClient("http://api.test", session=session)

    with pytest.raises(ApiError):
        api.get_worksheets()
