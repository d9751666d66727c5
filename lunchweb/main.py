import sys
from datetime import datetime
from typing import Callable, Literal, Optional

import uvicorn
from fastapi import FastAPI
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from jinja2 import TemplateSyntaxError
from pydantic import ValidationError

from lunchweb.config import Config, load_config
from lunchweb.errors import FetchError, NotFoundError, ParseError, RenderError
from lunchweb.order import OrderOverview
from lunchweb.render import HtmlPresenter, render_text
from lunchweb.tools.logger import BackgroundLogger
from lunchweb.tools.sheet_csv import fetch_csv
from lunchweb.tools.today_row import find_row_for_today

Clock = Callable[[], datetime]


def create_app(config: Config, clock: Optional[Clock] = None,
               logger: Optional[BackgroundLogger] = None) -> FastAPI:
    """Builds the app around an immutable config. Template errors surface here, not per request."""
    tz = config.tz
    now = clock or (lambda: datetime.now(tz))
    logger = logger or BackgroundLogger(config.log_file)
    presenter = HtmlPresenter(email=config.email, subject=config.subject, sheet_url=config.sheet_url)

    app = FastAPI(title="LunchWeb", description="Today's lunch orders from a published Google Sheet")

    @app.on_event("shutdown")
    def shutdown_event():
        logger.stop()

    def respond(status_code: int, body: str, media_type: str = "text/plain") -> Response:
        first_line = body.strip().splitlines()[0] if body.strip() else ""
        if status_code >= 400:
            logger.error(f"{status_code} {first_line}")
        else:
            logger.info(f"{status_code} {media_type} ({len(body)} chars)")
        if media_type == "text/html":
            return HTMLResponse(body, status_code=status_code)
        return PlainTextResponse(body, status_code=status_code)

    @app.get("/")
    def index(format: Literal["html", "text"] = "html"):
        try:
            rows = fetch_csv(config.csv_url)
        except (FetchError, ParseError) as e:
            return respond(500, f"error from csv: {e}")
        if config.header >= len(rows):
            return respond(500, f"error from csv: no header row at index {config.header} ({len(rows)} rows)")

        moment = now().astimezone(tz)
        try:
            row = find_row_for_today(rows, config.header, tz, now=moment)
        except NotFoundError as e:
            return respond(500, f"error for today's row: {e}")

        names = rows[config.header][1:]
        orders = (row[1:] + [""] * len(names))[:len(names)]
        overview = OrderOverview(names, orders)
        logger.info(f"Summary for {moment.date().isoformat()}:\n{overview.summary()}")

        if format == "text":
            return respond(200, render_text(overview, moment))
        try:
            return respond(200, presenter.render(overview, moment), media_type="text/html")
        except RenderError as e:
            return respond(500, f"error in template: {e}")

    return app


def main(argv=None):
    try:
        config = load_config(argv)
    except ValidationError as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        sys.exit(1)

    logger = BackgroundLogger(config.log_file)
    try:
        app = create_app(config, logger=logger)
    except TemplateSyntaxError as e:
        logger.error(f"template: {e}")
        logger.stop()
        sys.exit(1)

    logger.info(f"Starting server ({config.host}:{config.port})")
    # uvicorn exits non-zero itself when the port cannot be bound
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
