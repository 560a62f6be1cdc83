"""Configuration loader with type-safe dataclasses."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .aggregator import MAX_DAYS


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


# Upper bound for the history window shown per service.
MAX_DAYS_LIMIT = 365


def _is_url(location: str) -> bool:
    return location.startswith(("http://", "https://"))


@dataclass(frozen=True)
class SourcesConfig:
    """Where the service list and the per-service logs are read from.

    Both ``services`` and ``logs`` may be a local path or an http(s) URL.
    Logs are looked up as ``<logs>/<key><log_suffix>``.
    """

    services: str = "urls.cfg"
    logs: str = "logs"
    log_suffix: str = "_report.log"
    timeout: int = 10  # seconds per HTTP fetch

    def __post_init__(self) -> None:
        if not self.services:
            raise ConfigError("Service list location cannot be empty")
        if not self.logs:
            raise ConfigError("Log location cannot be empty")
        if not self.log_suffix:
            raise ConfigError("Log suffix cannot be empty")
        if "/" in self.log_suffix or "\\" in self.log_suffix:
            raise ConfigError(f"Log suffix must not contain path separators (got '{self.log_suffix}')")
        if self.timeout < 1:
            raise ConfigError(f"Fetch timeout must be at least 1 second (got {self.timeout})")


@dataclass(frozen=True)
class ReportConfig:
    """Configuration for the rendered status history."""

    title: str = "Status Page"
    max_days: int = MAX_DAYS

    def __post_init__(self) -> None:
        if not self.title:
            raise ConfigError("Report title cannot be empty")
        if not (1 <= self.max_days <= MAX_DAYS_LIMIT):
            raise ConfigError(f"Report max_days must be between 1 and {MAX_DAYS_LIMIT} (got {self.max_days})")


@dataclass(frozen=True)
class IncidentsConfig:
    """Configuration for the incident report panel."""

    enabled: bool = False
    url: str = ""

    def __post_init__(self) -> None:
        if self.enabled:
            if not self.url:
                raise ConfigError("Incidents URL is required when incidents are enabled")
            if not _is_url(self.url):
                raise ConfigError(f"Incidents URL must start with http:// or https://, got '{self.url}'")


@dataclass(frozen=True)
class OutputConfig:
    """Configuration for the generated dashboard file."""

    path: str = "index.html"

    def __post_init__(self) -> None:
        if not self.path:
            raise ConfigError("Output path cannot be empty")


@dataclass(frozen=True)
class ApiConfig:
    """Configuration for the live dashboard HTTP server."""

    port: int = 8080

    def __post_init__(self) -> None:
        if self.port < 1 or self.port > 65535:
            raise ConfigError(f"API port must be between 1 and 65535, got {self.port}")


@dataclass(frozen=True)
class Config:
    """Main configuration container."""

    sources: SourcesConfig = field(default_factory=SourcesConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    incidents: IncidentsConfig = field(default_factory=IncidentsConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    api: ApiConfig = field(default_factory=ApiConfig)


def _parse_sources_config(data: dict) -> SourcesConfig:
    """Parse sources configuration section."""
    return SourcesConfig(
        services=str(data.get("services", "urls.cfg")),
        logs=str(data.get("logs", "logs")),
        log_suffix=str(data.get("log_suffix", "_report.log")),
        timeout=int(data.get("timeout", 10)),
    )


def _parse_report_config(data: dict) -> ReportConfig:
    """Parse report configuration section."""
    return ReportConfig(
        title=str(data.get("title", "Status Page")),
        max_days=int(data.get("max_days", MAX_DAYS)),
    )


def _parse_incidents_config(data: dict) -> IncidentsConfig:
    """Parse incidents configuration section."""
    return IncidentsConfig(
        enabled=bool(data.get("enabled", False)),
        url=str(data.get("url") or ""),
    )


def _parse_output_config(data: dict) -> OutputConfig:
    """Parse output configuration section."""
    return OutputConfig(path=str(data.get("path", "index.html")))


def _parse_api_config(data: dict) -> ApiConfig:
    """Parse API configuration section."""
    return ApiConfig(port=int(data.get("port", 8080)))


def _apply_env_overrides(config_data: dict) -> dict:
    """Apply environment variable overrides to configuration.

    Supported overrides:
    - STATUSSTREAM_SERVICES: Override sources.services
    - STATUSSTREAM_LOGS: Override sources.logs
    - STATUSSTREAM_MAX_DAYS: Override report.max_days
    - STATUSSTREAM_INCIDENTS_URL: Override incidents.url and enable incidents
    - STATUSSTREAM_OUTPUT: Override output.path
    - STATUSSTREAM_API_PORT: Override api.port
    """
    for section in ("sources", "report", "incidents", "output", "api"):
        if config_data.get(section) is None:
            config_data[section] = {}
        elif not isinstance(config_data[section], dict):
            raise ConfigError(f"'{section}' section must be a dictionary")

    services = os.environ.get("STATUSSTREAM_SERVICES")
    if services is not None:
        config_data["sources"]["services"] = services

    logs = os.environ.get("STATUSSTREAM_LOGS")
    if logs is not None:
        config_data["sources"]["logs"] = logs

    max_days = os.environ.get("STATUSSTREAM_MAX_DAYS")
    if max_days is not None:
        config_data["report"]["max_days"] = max_days

    incidents_url = os.environ.get("STATUSSTREAM_INCIDENTS_URL")
    if incidents_url is not None:
        config_data["incidents"]["url"] = incidents_url
        config_data["incidents"]["enabled"] = bool(incidents_url)

    output = os.environ.get("STATUSSTREAM_OUTPUT")
    if output is not None:
        config_data["output"]["path"] = output

    api_port = os.environ.get("STATUSSTREAM_API_PORT")
    if api_port is not None:
        config_data["api"]["port"] = api_port

    return config_data


def _read_config_file(config_path: str) -> dict:
    """Read and decode a YAML configuration file."""
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML configuration: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file: {e}")

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a YAML dictionary")

    return data


def load_config(config_path: str | None = None) -> Config:
    """Load and validate configuration.

    Args:
        config_path: Path to a YAML configuration file. When None, defaults
            are used (environment overrides still apply).

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If the file cannot be read or configuration is invalid.
    """
    data = _read_config_file(config_path) if config_path is not None else {}
    data = _apply_env_overrides(data)

    try:
        return Config(
            sources=_parse_sources_config(data["sources"]),
            report=_parse_report_config(data["report"]),
            incidents=_parse_incidents_config(data["incidents"]),
            output=_parse_output_config(data["output"]),
            api=_parse_api_config(data["api"]),
        )
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid configuration value: {e}")
