import csv
import logging
import requests
from io import StringIO
from typing import List

from lunchweb.errors import FetchError, ParseError

logger = logging.getLogger(__name__)

Row = List[str]


def fetch_csv(url: str) -> List[Row]:
    """Fetches a published sheet and parses it as a list of rows."""
    try:
        response = requests.get(url)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(str(e)) from e
    # raise_for_status lets a final 3xx through
    if not 200 <= response.status_code < 300:
        raise FetchError(f"unexpected status {response.status_code} for url: {url}")
    logger.debug(f"Fetched {len(response.content)} bytes from {url}")
    return parse_csv(response.content)


def parse_csv(body: bytes) -> List[Row]:
    try:
        text = body.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ParseError(f"body is not valid UTF-8: {e}") from e

    reader = csv.reader(StringIO(text, newline=""), strict=True)
    try:
        # blank lines come back as empty lists
        return [row for row in reader if row]
    except csv.Error as e:
        raise ParseError(f"line {reader.line_num}: {e}") from e
