"""HTML rendering of status streams and the incident panel.

Fragments are small ``string.Template`` snippets. Every rendered fragment gets
a unique ``template_clone_<n>`` id from the Renderer that produced it, so one
Renderer should be used per page.
"""

import html
from datetime import date, datetime, timedelta
from string import Template

from .aggregator import FAILURE, MAX_DAYS, NODATA, PARTIAL, SUCCESS, classify
from .models import IncidentFeed, ServiceReport

STATUS_TEXTS = {
    NODATA: "No Data Available",
    SUCCESS: "Fully Operational",
    FAILURE: "Major Outage",
    PARTIAL: "Partial Outage",
}

STATUS_DESCRIPTIONS = {
    NODATA: "No Data Available: Health check was not performed.",
    SUCCESS: "No downtime recorded on this day.",
    FAILURE: "Major outages recorded on this day.",
    PARTIAL: "Partial outages recorded on this day.",
}

NO_ACTIVE_INCIDENTS = "No active Incidents"

STATUS_SQUARE_TEMPLATE = (
    '<div id="$id" class="statusSquare $color" title="$tooltip" '
    'data-color="$color" data-date="$date" data-status="$status" '
    'data-description="$description"></div>'
)

STATUS_STREAM_TEMPLATE = '<div id="$id" class="statusStreamContainer">$squares</div>'

STATUS_CONTAINER_TEMPLATE = """<div id="$id" class="statusContainer">
    <div class="statusHeader">
        <div class="statusTitle"><a href="$url" target="_blank" rel="noopener">$title</a></div>
        <div class="statusUptime">$upTime</div>
        <div class="statusText $color">$status</div>
    </div>
    $stream
</div>"""

INCIDENTS_TEMPLATE = """<section id="$id" class="incidents">
    <h2>Active Incidents</h2>
    <pre id="activeIncidentReports" class="incidentReport">$active</pre>
    <h2>Past Incidents</h2>
    <pre id="pastIncidentReports" class="incidentReport">$inactive</pre>
</section>"""


def status_text(category: str) -> str:
    """Return the short label for a day category."""
    return STATUS_TEXTS.get(category, "Unknown")


def status_description(category: str) -> str:
    """Return the tooltip description for a day category."""
    return STATUS_DESCRIPTIONS.get(category, "Unknown")


def date_string(day: date) -> str:
    """Format a date like ``Fri Jan 05 2024``."""
    return day.strftime("%a %b %d %Y")


def tooltip(key: str, day: date, category: str) -> str:
    """Return the hover text for a status square."""
    return f"{key} | {date_string(day)} : {status_text(category)}"


def templatize_string(text: str, parameters: dict[str, str] | None) -> str:
    """Replace ``$name`` placeholders in text.

    Placeholders without a matching parameter are left untouched.
    """
    if not parameters:
        return text
    return Template(text).safe_substitute(parameters)


class Renderer:
    """Renders report fragments for one page.

    Owns the counter used to give each fragment a unique element id.
    """

    def __init__(self, max_days: int = MAX_DAYS) -> None:
        self.max_days = max_days
        self._clone_id = 0

    def _next_id(self) -> str:
        clone_id = f"template_clone_{self._clone_id}"
        self._clone_id += 1
        return clone_id

    def templatize(
        self,
        template: str,
        parameters: dict[str, object] | None = None,
        markup: dict[str, str] | None = None,
    ) -> str:
        """Fill a fragment template.

        Args:
            template: Template text with ``$name`` placeholders.
            parameters: Plain values, HTML-escaped before substitution.
            markup: Already rendered HTML, substituted as-is.

        Returns:
            The rendered fragment with a fresh ``$id``.
        """
        values = {"id": self._next_id()}
        if parameters:
            values.update({name: html.escape(str(value)) for name, value in parameters.items()})
        if markup:
            values.update(markup)
        return templatize_string(template, values)

    def status_square(self, key: str, day: date, avg: float | None) -> str:
        """Render one day of a status stream."""
        category = classify(avg)
        return self.templatize(
            STATUS_SQUARE_TEMPLATE,
            {
                "color": category,
                "tooltip": tooltip(key, day, category),
                "date": date_string(day),
                "status": status_text(category),
                "description": status_description(category),
            },
        )

    def status_stream(self, report: ServiceReport, now: datetime) -> str:
        """Render the row of day squares, oldest day first."""
        squares = []
        for rel_day in range(self.max_days - 1, -1, -1):
            day = (now - timedelta(days=rel_day)).date()
            squares.append(self.status_square(report.service.key, day, report.log.days.get(rel_day)))
        return self.templatize(STATUS_STREAM_TEMPLATE, markup={"squares": "".join(squares)})

    def status_container(self, report: ServiceReport, now: datetime) -> str:
        """Render a service's header and status stream."""
        stream = self.status_stream(report, now)
        return self.templatize(
            STATUS_CONTAINER_TEMPLATE,
            {
                "title": report.service.key,
                "url": report.service.url,
                "color": report.status,
                "status": status_text(report.status),
                "upTime": report.log.uptime,
            },
            markup={"stream": stream},
        )

    def incidents(self, feed: IncidentFeed | None) -> str:
        """Render the incident panel, or nothing when there is no feed."""
        if feed is None:
            return ""
        return self.templatize(
            INCIDENTS_TEMPLATE,
            {
                "active": feed.active or NO_ACTIVE_INCIDENTS,
                "inactive": feed.inactive,
            },
        )
