"""statusstream - Daily status history pages from plain-text uptime logs."""

import argparse
import logging
import signal
import sys
from threading import Event
from typing import Optional

__version__ = "0.1.0"

# Global shutdown event for signal handlers
_shutdown_event: Optional[Event] = None

logger = logging.getLogger(__name__)


def _setup_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def _handle_shutdown(signum: int, frame: object) -> None:
    """Signal handler for graceful shutdown."""
    sig_name = signal.Signals(signum).name
    logger.info("Received %s, initiating shutdown...", sig_name)
    if _shutdown_event is not None:
        _shutdown_event.set()


def _load_config_or_exit(config_path: Optional[str]):
    """Load configuration, exiting with status 1 on errors."""
    from .config import load_config, ConfigError

    try:
        return load_config(config_path)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)


def _cmd_build(args: argparse.Namespace) -> None:
    """Execute the build command - write the dashboard page."""
    _setup_logging(args.verbose)

    from dataclasses import replace
    from .config import ConfigError, OutputConfig
    from .report import write_dashboard

    config = _load_config_or_exit(args.config)
    if args.output:
        try:
            config = replace(config, output=OutputConfig(path=args.output))
        except ConfigError as e:
            logger.error("Configuration error: %s", e)
            sys.exit(1)

    try:
        path = write_dashboard(config)
    except OSError as e:
        logger.error("Failed to write dashboard: %s", e)
        sys.exit(1)

    logger.info("Dashboard written to %s", path)


def _cmd_summary(args: argparse.Namespace) -> None:
    """Execute the summary command - print uptime per service."""
    _setup_logging(args.verbose)

    from .render import status_text
    from .report import generate_all_reports

    config = _load_config_or_exit(args.config)
    reports = generate_all_reports(config)

    if not reports:
        print("No services configured.")
        return

    width = max(len(report.service.key) for report in reports)
    for report in reports:
        print(f"{report.service.key:<{width}}  {status_text(report.status):<18}  {report.log.uptime:>8}")


def _cmd_serve(args: argparse.Namespace) -> None:
    """Execute the serve command - serve the live dashboard over HTTP."""
    global _shutdown_event

    _setup_logging(args.verbose)

    logger.info("statusstream %s starting...", __version__)

    from dataclasses import replace
    from .api import ApiServer, ApiError
    from .config import ApiConfig, ConfigError

    config = _load_config_or_exit(args.config)
    if args.port is not None:
        try:
            config = replace(config, api=ApiConfig(port=args.port))
        except ConfigError as e:
            logger.error("Configuration error: %s", e)
            sys.exit(1)

    _shutdown_event = Event()
    signal.signal(signal.SIGTERM, _handle_shutdown)
    signal.signal(signal.SIGINT, _handle_shutdown)

    server = ApiServer(config)
    try:
        server.start()
    except ApiError as e:
        logger.error("Failed to start API server: %s", e)
        sys.exit(1)

    try:
        _shutdown_event.wait()
    except KeyboardInterrupt:
        # Backup handler if signal doesn't work
        logger.info("Keyboard interrupt received")
    finally:
        server.stop()
        logger.info("Shutdown complete")


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to YAML configuration file (default: built-in defaults)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose (debug) logging",
    )


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for the statusstream package."""
    parser = argparse.ArgumentParser(
        description="statusstream - daily status history pages from uptime logs"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"statusstream {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    # Build subcommand (default behavior)
    build_parser = subparsers.add_parser(
        "build",
        help="Write the dashboard page (default)",
    )
    _add_common_arguments(build_parser)
    build_parser.add_argument(
        "-o", "--output",
        help="Output file (overrides config)",
    )
    build_parser.set_defaults(func=_cmd_build)

    # Summary subcommand
    summary_parser = subparsers.add_parser(
        "summary",
        help="Print current status and uptime per service",
    )
    _add_common_arguments(summary_parser)
    summary_parser.set_defaults(func=_cmd_summary)

    # Serve subcommand
    serve_parser = subparsers.add_parser(
        "serve",
        help="Serve the live dashboard over HTTP",
    )
    _add_common_arguments(serve_parser)
    serve_parser.add_argument(
        "-p", "--port",
        type=int,
        help="Port to listen on (overrides config)",
    )
    serve_parser.set_defaults(func=_cmd_serve)

    args = parser.parse_args(argv)

    # Default to 'build' if no command specified
    if args.command is None:
        args.config = None
        args.verbose = False
        args.output = None
        args.func = _cmd_build

    args.func(args)
