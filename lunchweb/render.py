from datetime import datetime
from email.utils import format_datetime
from typing import List
from urllib.parse import quote

from jinja2 import Environment, Template, TemplateError, select_autoescape
from pydantic import BaseModel

from lunchweb.constants.template import INDEX_TEMPLATE
from lunchweb.errors import RenderError
from lunchweb.order import LineItem, OrderOverview


def format_timestamp(moment: datetime) -> str:
    """RFC 1123 with a numeric zone, e.g. Mon, 02 Jan 2006 15:04:05 -0700."""
    return format_datetime(moment)


def mailto_link(email: str, subject: str, body: str) -> str:
    return f"mailto:{email}?subject={quote(subject, safe='')}&body={quote(body, safe='')}"


def render_text(overview: OrderOverview, moment: datetime) -> str:
    lines = [f"Orders as of {format_timestamp(moment)}:"]
    lines += [f"{item.name}: {item.order}" for item in overview.line_items()]
    lines.append("")
    lines.append(
        f"{overview.did_not_order_count()} of {overview.max_count()} did not order "
        f"(~{overview.did_not_order_percent():.2f}%)"
    )
    lines.append(
        f"{overview.order_count()} of {overview.max_count()} did order "
        f"(~{overview.order_percent():.2f}%)"
    )
    return "\n".join(lines) + "\n"


class IndexView(BaseModel):
    now: str
    today: str
    sheet_url: str
    mailto: str
    line_items: List[LineItem]
    order_count: int
    max_count: int
    order_percent: float


class HtmlPresenter:
    """Renders the overview page. The template is compiled once, at construction."""

    def __init__(self, email: str, subject: str, sheet_url: str, source: str = INDEX_TEMPLATE):
        env = Environment(autoescape=select_autoescape(default_for_string=True, default=True))
        self.template: Template = env.from_string(source)
        self.email = email
        self.subject = subject
        self.sheet_url = sheet_url

    def view(self, overview: OrderOverview, moment: datetime) -> IndexView:
        today = moment.date().isoformat()
        items = overview.line_items()
        return IndexView(
            now=format_timestamp(moment),
            today=today,
            sheet_url=self.sheet_url,
            mailto=mailto_link(self.email, f"{self.subject} ({today})", overview.summary()),
            line_items=items,
            order_count=len(items),
            max_count=overview.max_count(),
            order_percent=overview.order_percent(),
        )

    def render(self, overview: OrderOverview, moment: datetime) -> str:
        view = self.view(overview, moment)
        try:
            return self.template.render(view=view)
        except TemplateError as e:
            raise RenderError(str(e)) from e
