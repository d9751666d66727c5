import pytest
from fastapi.testclient import TestClient

from lunchweb.config import Config
from lunchweb.main import create_app, main
from lunchweb.tools.logger import BackgroundLogger


@pytest.fixture
def logger():
    logger = BackgroundLogger()
    yield logger
    logger.stop()


@pytest.fixture
def client(noon_jan_2, logger):
    config = Config(csv_url="https://sheet.test/csv", email="lunch@example.com", sheet_url="https://sheet.test/edit")
    return TestClient(create_app(config, clock=lambda: noon_jan_2, logger=logger))


def test_html(client, serve_csv):
    calls = serve_csv()
    response = client.get("/")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<p>Alice: BLT</p>" in response.text
    assert "<p>Carol: Soup</p>" in response.text
    assert "Wrong" not in response.text
    assert "2 out of 3 ordered something (~66.67%)" in response.text
    assert "body=Alice%3A%20BLT%0ACarol%3A%20Soup%0A" in response.text
    assert calls == ["https://sheet.test/csv"]


def test_text(client, serve_csv):
    serve_csv()
    response = client.get("/", params={"format": "text"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text.splitlines()[1:] == [
        "Alice: BLT",
        "Carol: Soup",
        "",
        "1 of 3 did not order (~33.33%)",
        "2 of 3 did order (~66.67%)",
    ]


def test_unknown_format(client, serve_csv):
    serve_csv()
    assert client.get("/", params={"format": "pdf"}).status_code == 422


def test_upstream_404(client, serve_csv):
    serve_csv("Not Found", status_code=404)
    response = client.get("/")
    assert response.status_code == 500
    assert "error from csv" in response.text


def test_malformed_csv(client, serve_csv):
    serve_csv('Date,"Alice"x\n')
    response = client.get("/")
    assert response.status_code == 500
    assert response.text.startswith("error from csv: ")


def test_missing_header_row(client, serve_csv):
    serve_csv("Date,Alice\n")
    response = client.get("/")
    assert response.status_code == 500
    assert "no header row at index 3" in response.text


def test_no_row_for_today(client, serve_csv):
    serve_csv("\n".join(["x", "x", "x", "Date,Alice", "2020-12-31,Soup"]) + "\n")
    response = client.get("/")
    assert response.status_code == 500
    assert response.text == "error for today's row: no row found for today (2021-01-02)"


def test_short_row_is_padded(client, serve_csv):
    serve_csv("\n".join(["x", "x", "x", "Date,Alice,Bob,Carol", "2021-01-02,Soup"]) + "\n")
    response = client.get("/", params={"format": "text"})
    assert response.status_code == 200
    assert "1 of 3 did order (~33.33%)" in response.text


def test_responses_are_logged(client, serve_csv, logger, caplog):
    serve_csv("Not Found", status_code=404)
    with caplog.at_level("INFO", logger="lunchweb"):
        client.get("/")
        logger.flush()
    assert "500 error from csv" in caplog.text


def test_main_exits_on_bad_timezone():
    with pytest.raises(SystemExit) as info:
        main(["--tz", "Nowhere/Atlantis"])
    assert info.value.code == 1


def test_recipient_list_in_mailto(noon_jan_2, logger, serve_csv):
    serve_csv()
    config = Config(csv_url="https://sheet.test/csv", email="a@example.org,b@example.org")
    client = TestClient(create_app(config, clock=lambda: noon_jan_2, logger=logger))
    assert 'href="mailto:a@example.org,b@example.org?subject=' in client.get("/").text


def test_upstream_304(client, serve_csv):
    serve_csv("", status_code=304)
    response = client.get("/")
    assert response.status_code == 500
    assert response.text == "error from csv: unexpected status 304 for url: https://sheet.test/csv"
