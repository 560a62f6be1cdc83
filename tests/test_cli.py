"""Tests for the command line interface."""

from pathlib import Path
from unittest.mock import patch

import pytest

from statusstream import main
from statusstream.config import Config


@pytest.fixture
def config_file(site_dir: Path) -> Path:
    """Write a YAML config pointing at site_dir."""
    path = site_dir / "config.yaml"
    path.write_text(
        f"""sources:
  services: {site_dir / 'urls.cfg'}
  logs: {site_dir / 'logs'}
output:
  path: {site_dir / 'out' / 'index.html'}
"""
    )
    return path


class TestBuildCommand:
    """Tests for the build subcommand."""

    def test_writes_dashboard(self, config_file: Path, site_dir: Path) -> None:
        """build writes the page to the configured path."""
        main(["build", "-c", str(config_file)])

        page = (site_dir / "out" / "index.html").read_text(encoding="utf-8")
        assert ">google</a>" in page

    def test_output_override(self, config_file: Path, tmp_path: Path) -> None:
        """--output overrides the configured path."""
        target = tmp_path / "custom.html"
        main(["build", "-c", str(config_file), "-o", str(target)])
        assert target.exists()

    def test_missing_config_exits(self, tmp_path: Path) -> None:
        """A missing config file exits with status 1."""
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "-c", str(tmp_path / "missing.yaml")])
        assert exc_info.value.code == 1

    def test_default_command_is_build(self) -> None:
        """Without a subcommand, build runs with defaults."""
        with patch("statusstream.report.write_dashboard", return_value=Path("index.html")) as mock_write:
            main([])

        mock_write.assert_called_once()
        assert isinstance(mock_write.call_args.args[0], Config)


class TestSummaryCommand:
    """Tests for the summary subcommand."""

    def test_prints_each_service(self, config_file: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """summary prints status and uptime per service."""
        main(["summary", "-c", str(config_file)])

        lines = capsys.readouterr().out.splitlines()
        service_lines = [line for line in lines if line.split() and line.split()[0] in ("google", "github", "missing")]
        assert len(service_lines) == 3
        assert any("--%" in line and "No Data Available" in line for line in service_lines)

    def test_no_services(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """An empty service list is reported."""
        config = tmp_path / "config.yaml"
        config.write_text(f"sources:\n  services: {tmp_path / 'empty.cfg'}\n")

        main(["summary", "-c", str(config)])

        assert "No services configured." in capsys.readouterr().out
