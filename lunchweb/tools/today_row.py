import logging
import re
from datetime import date, datetime, tzinfo
from typing import List, Optional

from lunchweb.errors import NotFoundError

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
# strptime alone also accepts 2021-1-2
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def today_in(tz: tzinfo, now: Optional[datetime] = None) -> date:
    if now is None:
        return datetime.now(tz).date()
    return now.astimezone(tz).date()


def find_row_for_today(rows: List[List[str]], header_index: int, tz: tzinfo,
                       now: Optional[datetime] = None) -> List[str]:
    """Returns the first row below the header whose date cell is today in `tz`.

    Rows with a missing or unparseable date are logged and skipped.
    """
    today = today_in(tz, now)

    for row in rows[header_index + 1:]:
        if not row:
            continue
        if not DATE_PATTERN.fullmatch(row[0]):
            logger.warning(f"Skipping row with bad date {row[0]!r}: not in YYYY-MM-DD form")
            continue
        try:
            row_date = datetime.strptime(row[0], DATE_FORMAT).date()
        except ValueError as e:
            logger.warning(f"Skipping row with bad date {row[0]!r}: {e}")
            continue
        if row_date == today:
            return row

    raise NotFoundError(f"no row found for today ({today.isoformat()})")
