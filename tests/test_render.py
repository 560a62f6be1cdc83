"""Tests for the render module."""

from datetime import UTC, date, datetime

import pytest

from statusstream.aggregator import FAILURE, NODATA, PARTIAL, SUCCESS
from statusstream.models import IncidentFeed, NormalizedLog, ServiceEntry, ServiceReport
from statusstream.render import (
    NO_ACTIVE_INCIDENTS,
    Renderer,
    date_string,
    status_description,
    status_text,
    templatize_string,
    tooltip,
)


@pytest.fixture
def now() -> datetime:
    """Reference time for rendering."""
    return datetime(2024, 1, 10, 15, 0, 0, tzinfo=UTC)


@pytest.fixture
def report() -> ServiceReport:
    """A report with data for today and two days ago."""
    return ServiceReport(
        service=ServiceEntry(key="google", url="https://google.com"),
        log=NormalizedLog(days={0: 1.0, 2: 0.0}, uptime="50.00%", success_count=1, total_count=2),
        status=SUCCESS,
    )


class TestStatusTexts:
    """Tests for status_text and status_description functions."""

    @pytest.mark.parametrize(
        "category, expected",
        [
            (NODATA, "No Data Available"),
            (SUCCESS, "Fully Operational"),
            (FAILURE, "Major Outage"),
            (PARTIAL, "Partial Outage"),
            ("bogus", "Unknown"),
        ],
    )
    def test_status_text(self, category: str, expected: str) -> None:
        """Each category has a short label."""
        assert status_text(category) == expected

    @pytest.mark.parametrize(
        "category, expected",
        [
            (NODATA, "No Data Available: Health check was not performed."),
            (SUCCESS, "No downtime recorded on this day."),
            (FAILURE, "Major outages recorded on this day."),
            (PARTIAL, "Partial outages recorded on this day."),
            ("bogus", "Unknown"),
        ],
    )
    def test_status_description(self, category: str, expected: str) -> None:
        """Each category has a tooltip description."""
        assert status_description(category) == expected


class TestFormatting:
    """Tests for date_string, tooltip and templatize_string functions."""

    def test_date_string(self) -> None:
        """Dates are formatted as weekday, month, day and year."""
        assert date_string(date(2024, 1, 5)) == "Fri Jan 05 2024"

    def test_tooltip(self) -> None:
        """Tooltips combine key, date and status."""
        assert tooltip("google", date(2024, 1, 5), PARTIAL) == "google | Fri Jan 05 2024 : Partial Outage"

    def test_templatize_string(self) -> None:
        """Known placeholders are replaced, unknown ones are left alone."""
        assert templatize_string("$title is $status ($other)", {"title": "API", "status": "up"}) == "API is up ($other)"

    def test_templatize_string_without_parameters(self) -> None:
        """Without parameters the text is returned unchanged."""
        assert templatize_string("$title", None) == "$title"
        assert templatize_string("$title", {}) == "$title"


class TestRenderer:
    """Tests for the Renderer class."""

    def test_ids_are_unique_and_increasing(self) -> None:
        """Every fragment gets the next clone id."""
        renderer = Renderer()
        first = renderer.templatize('<div id="$id"></div>')
        second = renderer.templatize('<div id="$id"></div>')

        assert first == '<div id="template_clone_0"></div>'
        assert second == '<div id="template_clone_1"></div>'

    def test_ids_are_per_renderer(self) -> None:
        """Separate renderers count independently."""
        Renderer().templatize("$id")
        assert Renderer().templatize("$id") == "template_clone_0"

    def test_parameters_are_escaped(self) -> None:
        """Plain values are HTML-escaped."""
        html = Renderer().templatize("<p>$text</p>", {"text": "<b>&\"x\"</b>"})
        assert html == "<p>&lt;b&gt;&amp;&quot;x&quot;&lt;/b&gt;</p>"

    def test_markup_is_not_escaped(self) -> None:
        """Markup values are inserted as-is."""
        html = Renderer().templatize("<p>$inner</p>", markup={"inner": "<b>bold</b>"})
        assert html == "<p><b>bold</b></p>"

    def test_status_square(self) -> None:
        """A square carries its category and tooltip data."""
        html = Renderer().status_square("google", date(2024, 1, 5), 0.5)

        assert 'class="statusSquare partial"' in html
        assert 'data-color="partial"' in html
        assert 'data-date="Fri Jan 05 2024"' in html
        assert 'data-status="Partial Outage"' in html
        assert 'data-description="Partial outages recorded on this day."' in html
        assert 'title="google | Fri Jan 05 2024 : Partial Outage"' in html

    def test_status_stream_has_one_square_per_day(self, report: ServiceReport, now: datetime) -> None:
        """The stream shows exactly max_days squares."""
        html = Renderer(max_days=30).status_stream(report, now)
        assert html.count('class="statusSquare ') == 30

    def test_status_stream_is_oldest_first(self, report: ServiceReport, now: datetime) -> None:
        """Squares run from the oldest day on the left to today on the right."""
        html = Renderer(max_days=3).status_stream(report, now)

        oldest = html.index('data-date="Mon Jan 08 2024"')
        middle = html.index('data-date="Tue Jan 09 2024"')
        today = html.index('data-date="Wed Jan 10 2024"')
        assert oldest < middle < today

        assert html.count("statusSquare failure") == 1
        assert html.count("statusSquare nodata") == 1
        assert html.count("statusSquare success") == 1

    def test_status_stream_without_data(self, now: datetime) -> None:
        """A service without data renders every day as nodata."""
        empty = ServiceReport(
            service=ServiceEntry(key="down", url="https://down.example.com"),
            log=NormalizedLog(days={}, uptime="--%"),
            status=NODATA,
        )
        html = Renderer(max_days=5).status_stream(empty, now)
        assert html.count("statusSquare nodata") == 5

    def test_status_container(self, report: ServiceReport, now: datetime) -> None:
        """The container shows title, link, status and uptime around the stream."""
        html = Renderer(max_days=3).status_container(report, now)

        assert 'href="https://google.com"' in html
        assert ">google</a>" in html
        assert "50.00%" in html
        assert 'class="statusText success">Fully Operational' in html
        assert 'class="statusStreamContainer"' in html

    def test_incidents_none(self) -> None:
        """Without a feed the panel is omitted."""
        assert Renderer().incidents(None) == ""

    def test_incidents_without_active(self) -> None:
        """No active incident text shows the default message."""
        html = Renderer().incidents(IncidentFeed(active=None, inactive="Outage on Monday"))

        assert NO_ACTIVE_INCIDENTS in html
        assert "Outage on Monday" in html

    def test_incidents_are_escaped(self) -> None:
        """Incident text is never rendered as HTML."""
        html = Renderer().incidents(IncidentFeed(active="<script>alert(1)</script>", inactive="**bold**"))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "**bold**" in html
