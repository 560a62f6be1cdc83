"""Report generation: fetch each service's log, aggregate it and render the page.

Services are processed one at a time in service-list order. A service whose
log cannot be fetched still gets a report, with no data.
"""

import html
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ._dashboard import CSS_STYLES, JS_TOOLTIP, build_html
from .aggregator import FAILURE, NODATA, PARTIAL, SUCCESS, as_utc, classify, normalize_log
from .config import Config, SourcesConfig
from .models import IncidentFeed, ServiceEntry, ServiceReport
from .render import Renderer, status_text
from .sources import fetch_incidents, fetch_log, load_services

logger = logging.getLogger(__name__)


def _resolve_now(now: datetime | None) -> datetime:
    return as_utc(now) if now is not None else datetime.now(UTC)


def generate_report(
    sources: SourcesConfig,
    service: ServiceEntry,
    now: datetime,
    max_days: int,
) -> ServiceReport:
    """Fetch and aggregate the uptime log of a single service."""
    log = normalize_log(fetch_log(sources, service.key), now, max_days=max_days)
    status = classify(log.days.get(0))
    logger.debug(
        "Service %s: %d check(s) over %d day(s), uptime %s, status %s",
        service.key,
        log.total_count,
        len(log.days),
        log.uptime,
        status,
    )
    return ServiceReport(service=service, log=log, status=status)


def generate_all_reports(config: Config, now: datetime | None = None) -> list[ServiceReport]:
    """Generate reports for every configured service.

    Args:
        config: Application configuration.
        now: Reference time for relative days (defaults to the current time).

    Returns:
        One report per service, in service-list order.
    """
    now = _resolve_now(now)
    services = load_services(config.sources)
    if not services:
        logger.warning("No services found in %s", config.sources.services)

    return [generate_report(config.sources, service, now, config.report.max_days) for service in services]


def load_incidents(config: Config) -> IncidentFeed | None:
    """Fetch the incident feed if incidents are enabled."""
    if not config.incidents.enabled:
        return None
    return fetch_incidents(config.incidents.url, timeout=config.sources.timeout)


def render_dashboard(
    config: Config,
    reports: list[ServiceReport],
    incidents: IncidentFeed | None,
    now: datetime,
) -> str:
    """Render the full dashboard page for already generated reports."""
    renderer = Renderer(max_days=config.report.max_days)
    containers = "\n".join(renderer.status_container(report, now) for report in reports)

    return build_html(
        title=html.escape(config.report.title),
        css=CSS_STYLES,
        js_tooltip=JS_TOOLTIP,
        reports=containers,
        incidents=renderer.incidents(incidents),
        generated_at=html.escape(now.strftime("%Y-%m-%d %H:%M UTC")),
    )


def build_dashboard(config: Config, now: datetime | None = None) -> str:
    """Fetch, aggregate and render the dashboard page."""
    now = _resolve_now(now)
    reports = generate_all_reports(config, now)
    return render_dashboard(config, reports, load_incidents(config), now)


def write_dashboard(config: Config, now: datetime | None = None) -> Path:
    """Build the dashboard and write it to the configured output path.

    Raises:
        OSError: If the output file cannot be written.
    """
    page = build_dashboard(config, now)
    path = Path(config.output.path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(page, encoding="utf-8")
    return path


def report_to_dict(report: ServiceReport) -> dict[str, Any]:
    """Convert a ServiceReport to a JSON-serializable dictionary."""
    return {
        "name": report.service.key,
        "url": report.service.url,
        "status": report.status,
        "status_text": status_text(report.status),
        "uptime": report.log.uptime,
        "checks": report.log.total_count,
        "days": {str(rel_day): avg for rel_day, avg in sorted(report.log.days.items())},
    }


def build_status_response(reports: list[ServiceReport]) -> dict[str, Any]:
    """Build the full status response with a per-category summary."""
    summary = {"total": len(reports)}
    for category in (SUCCESS, PARTIAL, FAILURE, NODATA):
        summary[category] = sum(1 for report in reports if report.status == category)

    return {
        "services": [report_to_dict(report) for report in reports],
        "summary": summary,
    }
