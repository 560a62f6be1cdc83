"""Readers for the service list, uptime logs and incident feed.

Every source may be a local path or an http(s) URL. A source that cannot be
read is treated as empty: callers get ``""`` (or None for the incident feed)
and the dashboard shows "no data" instead of failing.
"""

import logging
from pathlib import Path
from urllib.parse import quote

import requests

from .config import SourcesConfig
from .models import IncidentFeed, ServiceEntry
from .security import validate_service_key

logger = logging.getLogger(__name__)

USER_AGENT = "statusstream/0.1"


def is_remote(location: str) -> bool:
    """Return True if the location is an http(s) URL."""
    return location.startswith(("http://", "https://"))


def _get(url: str, timeout: int) -> requests.Response | None:
    """GET a URL, returning None on transport errors or non-2xx responses."""
    try:
        response = requests.get(url, timeout=timeout, headers={"User-Agent": USER_AGENT})
    except requests.RequestException as e:
        logger.warning("Failed to fetch %s: %s", url, e)
        return None

    if not response.ok:
        logger.warning("Fetching %s returned HTTP %d", url, response.status_code)
        return None

    return response


def read_text(location: str, timeout: int = 10) -> str:
    """Read a text source.

    Args:
        location: Local file path or http(s) URL.
        timeout: Request timeout in seconds for URLs.

    Returns:
        The source contents, or an empty string if it could not be read.
    """
    if is_remote(location):
        response = _get(location, timeout)
        return response.text if response is not None else ""

    try:
        return Path(location).read_text(encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to read %s: %s", location, e)
        return ""


def parse_service_list(text: str) -> list[ServiceEntry]:
    """Parse a ``key=url`` service list.

    Lines are split on the first ``=`` so URLs may contain query strings.
    Lines without both a key and a URL are skipped, as are keys that are not
    safe to use in log file names.
    """
    services: list[ServiceEntry] = []
    for line in text.split("\n"):
        key, _, url = line.partition("=")
        key = key.strip()
        url = url.strip()
        if not key or not url:
            continue

        if validate_service_key(key) is None:
            logger.warning("Skipping service with invalid key: %r", key)
            continue

        services.append(ServiceEntry(key=key, url=url))
    return services


def load_services(config: SourcesConfig) -> list[ServiceEntry]:
    """Read and parse the configured service list."""
    services = parse_service_list(read_text(config.services, config.timeout))
    logger.debug("Loaded %d service(s) from %s", len(services), config.services)
    return services


def log_location(config: SourcesConfig, key: str) -> str:
    """Return the path or URL of a service's uptime log."""
    filename = f"{key}{config.log_suffix}"
    if is_remote(config.logs):
        return f"{config.logs.rstrip('/')}/{quote(filename)}"
    return str(Path(config.logs) / filename)


def fetch_log(config: SourcesConfig, key: str) -> str:
    """Read a service's uptime log, or return an empty string if unavailable."""
    return read_text(log_location(config, key), config.timeout)


def fetch_incidents(url: str, timeout: int = 10) -> IncidentFeed | None:
    """Fetch the incident feed.

    The feed is a JSON object with an optional ``active`` string and an
    ``inactive`` string.

    Returns:
        The parsed feed, or None if it could not be fetched or decoded.
    """
    response = _get(url, timeout)
    if response is None:
        return None

    try:
        data = response.json()
    except ValueError as e:
        logger.warning("Incident feed at %s is not valid JSON: %s", url, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Incident feed at %s is not a JSON object", url)
        return None

    active = data.get("active")
    inactive = data.get("inactive")
    return IncidentFeed(
        active=str(active) if active else None,
        inactive=str(inactive) if inactive is not None else "",
    )
