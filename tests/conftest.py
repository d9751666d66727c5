import io
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest
import requests

BRUSSELS = ZoneInfo("Europe/Brussels")

SHEET_CSV = """LunchWeb,,,
,,,
Week 1,,,
Date,Alice,Bob,Carol
2021-01-01,Pasta,,Soup
2021-01-02,BLT, ,Soup
bad-date,x,y,z
2021-01-02,Wrong,Wrong,Wrong
"""


def make_response(status_code: int, body: str, url: str = "https://sheet.test/csv") -> requests.Response:
    response = requests.Response()
    response.status_code = status_code
    response.url = url
    response.raw = io.BytesIO(body.encode("utf-8"))
    return response


@pytest.fixture
def serve_csv(monkeypatch):
    """Replaces requests.get; returns the list of requested URLs."""
    calls = []

    def install(body: str = SHEET_CSV, status_code: int = 200):
        def fake_get(url, **kwargs):
            calls.append(url)
            return make_response(status_code, body, url)
        monkeypatch.setattr("lunchweb.tools.sheet_csv.requests.get", fake_get)
        return calls

    return install


@pytest.fixture
def noon_jan_2():
    return datetime(2021, 1, 2, 12, 0, tzinfo=BRUSSELS)
