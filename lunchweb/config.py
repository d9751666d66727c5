import argparse
import os
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CSV_URL = "https://docs.google.com/spreadsheets/d/e/2PACX-1vTE16CfbUQiYoq6lrYJ27UENAYJWQ2lPtkE4eHUMMGKHnfdZ5d-BwR0gD1eom3IwPuEtVOgG73Y-QKR/pub?gid=0&single=true&output=csv"


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = Field(8081, gt=0, lt=65536)
    csv_url: str = DEFAULT_CSV_URL
    header: int = Field(3, ge=0, description="index of the header row with the column names")
    timezone: str = "Europe/Brussels"
    subject: str = "Order"
    email: str = "test@example.org"
    sheet_url: str = "https://example.com"
    log_file: Optional[str] = None

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"unknown timezone {value!r}") from e
        return value

    @field_validator("email")
    @classmethod
    def valid_recipients(cls, value: str) -> str:
        """Checks each comma-separated recipient but keeps the text as given."""
        for part in value.split(","):
            try:
                validate_email(part.strip(), check_deliverability=False)
            except EmailNotValidError as e:
                raise ValueError(f"invalid recipient {part.strip()!r}: {e}") from e
        return value

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)


def build_parser() -> argparse.ArgumentParser:
    """Flag defaults come from LUNCHWEB_* environment variables when set."""
    defaults = Config.model_fields
    env = os.getenv
    p = argparse.ArgumentParser(prog="lunchweb", description="Serve today's lunch orders from a published sheet.")
    p.add_argument("--host", default=env("LUNCHWEB_HOST", defaults["host"].default), help="interface to bind to")
    p.add_argument("--port", type=int, default=env("LUNCHWEB_PORT", defaults["port"].default), help="port to host on")
    p.add_argument("--csvurl", dest="csv_url", default=env("LUNCHWEB_CSV_URL", defaults["csv_url"].default),
                   help="public URL of the google sheets CSV")
    p.add_argument("--header", type=int, default=env("LUNCHWEB_HEADER", defaults["header"].default),
                   help="index of the header row with the column names")
    p.add_argument("--tz", dest="timezone", default=env("LUNCHWEB_TZ", defaults["timezone"].default), help="timezone to use")
    p.add_argument("--subject", default=env("LUNCHWEB_SUBJECT", defaults["subject"].default), help="the email subject")
    p.add_argument("--email", default=env("LUNCHWEB_EMAIL", defaults["email"].default), help="which email to send to")
    p.add_argument("--sheet-url", dest="sheet_url", default=env("LUNCHWEB_SHEET_URL", defaults["sheet_url"].default),
                   help="spreadsheet url")
    p.add_argument("--log-file", dest="log_file", default=env("LUNCHWEB_LOG_FILE"), help="write the log here instead of stderr")
    return p


def load_config(argv: Optional[List[str]] = None) -> Config:
    # Load environment variables
    load_dotenv()
    args = build_parser().parse_args(argv)
    return Config(**vars(args))
