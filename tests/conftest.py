"""Shared fixtures for statusstream tests."""

from pathlib import Path

import pytest

from statusstream.config import Config, IncidentsConfig, OutputConfig, ReportConfig, SourcesConfig

GOOGLE_LOG = """2024-01-01 10:00:00,success
2024-01-01 14:00:00,failure
2024-01-02 10:00:00,success
"""

GITHUB_LOG = """2024-01-02 09:00:00,failure
2024-01-02 10:00:00,failure
2024-01-02 11:00:00,failure
"""


@pytest.fixture
def site_dir(tmp_path: Path) -> Path:
    """Create a service list and logs for three services, one without a log."""
    logs = tmp_path / "logs"
    logs.mkdir()
    (logs / "google_report.log").write_text(GOOGLE_LOG)
    (logs / "github_report.log").write_text(GITHUB_LOG)
    (tmp_path / "urls.cfg").write_text(
        "google=https://google.com\ngithub=https://github.com\nmissing=https://missing.example.com\n"
    )
    return tmp_path


@pytest.fixture
def site_config(site_dir: Path) -> Config:
    """Configuration reading from site_dir."""
    return Config(
        sources=SourcesConfig(services=str(site_dir / "urls.cfg"), logs=str(site_dir / "logs")),
        report=ReportConfig(title="Test Status"),
        incidents=IncidentsConfig(),
        output=OutputConfig(path=str(site_dir / "public" / "index.html")),
    )
