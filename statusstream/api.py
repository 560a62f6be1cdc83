"""HTTP server for the live status dashboard."""

import json
import logging
import threading
from datetime import UTC, datetime
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any, Dict, Optional
from urllib.parse import unquote

from .config import Config
from .report import (
    build_status_response,
    generate_all_reports,
    generate_report,
    load_incidents,
    render_dashboard,
    report_to_dict,
)
from .sources import load_services

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Raised when an API operation fails."""
    pass


class StatusHandler(BaseHTTPRequestHandler):
    """HTTP request handler for dashboard and status endpoints.

    Every request fetches and aggregates the logs again, so the page always
    reflects the current log contents.
    """

    # Class-level reference set by factory
    config: Optional[Config] = None

    def log_message(self, format: str, *args: Any) -> None:
        """Override to use Python logging instead of stderr."""
        logger.debug("API %s - %s", self.address_string(), format % args)

    def _send_body(self, code: int, body: bytes, content_type: str) -> None:
        self.send_response(code)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.send_header("Cache-Control", "no-cache")
        self.send_header("Connection", "close")
        self.end_headers()
        self.wfile.write(body)

    def _send_json(self, code: int, data: Dict[str, Any]) -> None:
        """Send a JSON response with the given status code."""
        self._send_body(code, json.dumps(data, indent=2).encode("utf-8"), "application/json")

    def _send_error_json(self, code: int, message: str) -> None:
        """Send a JSON error response."""
        self._send_json(code, {"error": message})

    def _send_html(self, code: int, html: str) -> None:
        """Send an HTML response with the given status code."""
        self._send_body(code, html.encode("utf-8"), "text/html; charset=utf-8")

    def do_GET(self) -> None:
        """Handle GET requests."""
        path = self.path.split("?", 1)[0]
        try:
            if path in ("/", "/index.html"):
                self._handle_dashboard()
            elif path == "/health":
                self._handle_health()
            elif path == "/status":
                self._handle_status_all()
            elif path.startswith("/status/"):
                name = unquote(path[8:])  # Extract name after /status/
                if name:
                    self._handle_status_by_name(name)
                else:
                    self._send_error_json(400, "Service name is required")
            else:
                self._send_error_json(404, "Not found")
        except Exception as e:
            logger.exception("Error handling request: %s", e)
            self._send_error_json(500, "Internal server error")

    def _handle_dashboard(self) -> None:
        """Handle GET / endpoint - render the dashboard page."""
        now = datetime.now(UTC)
        reports = generate_all_reports(self.config, now)
        page = render_dashboard(self.config, reports, load_incidents(self.config), now)
        self._send_html(200, page)

    def _handle_health(self) -> None:
        """Handle GET /health endpoint."""
        self._send_json(200, {"status": "ok"})

    def _handle_status_all(self) -> None:
        """Handle GET /status endpoint."""
        reports = generate_all_reports(self.config)
        self._send_json(200, build_status_response(reports))

    def _handle_status_by_name(self, name: str) -> None:
        """Handle GET /status/<name> endpoint."""
        for service in load_services(self.config.sources):
            if service.key == name:
                report = generate_report(
                    self.config.sources,
                    service,
                    datetime.now(UTC),
                    self.config.report.max_days,
                )
                self._send_json(200, report_to_dict(report))
                return
        self._send_error_json(404, f"Service '{name}' not found")


def _create_handler_class(config: Config) -> type:
    """Create a handler class with the configuration bound."""

    class BoundStatusHandler(StatusHandler):
        pass

    BoundStatusHandler.config = config
    return BoundStatusHandler


class ApiServer:
    """Threaded HTTP server for the live dashboard."""

    def __init__(self, config: Config, host: str = "") -> None:
        """Initialize the server.

        Args:
            config: Application configuration.
            host: Interface to bind to (all interfaces by default).
        """
        self.config = config
        self.host = host
        self._server: Optional[ThreadingHTTPServer] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        """Start the server in a background thread.

        Raises:
            ApiError: If the server fails to start.
        """
        if self._thread is not None and self._thread.is_alive():
            logger.warning("API server is already running")
            return

        port = self.config.api.port
        try:
            self._server = ThreadingHTTPServer((self.host, port), _create_handler_class(self.config))
        except OSError as e:
            if e.errno == 98 or e.errno == 48:  # EADDRINUSE (Linux=98, macOS=48)
                raise ApiError(
                    f"Port {port} is already in use. "
                    f"Another process may be using this port, or statusstream is already serving."
                )
            elif e.errno == 13:  # EACCES - Permission denied
                raise ApiError(
                    f"Permission denied for port {port}. "
                    f"Ports below 1024 require root privileges. "
                    f"Use a port >= 1024 or run with elevated permissions."
                )
            else:
                raise ApiError(f"Failed to start API server on port {port}: {e}")

        self._server.daemon_threads = True
        self._thread = threading.Thread(
            target=self._server.serve_forever,
            kwargs={"poll_interval": 0.5},
            name="api-server",
            daemon=True,
        )
        self._thread.start()
        logger.info("API server started on port %d", port)

    def stop(self) -> None:
        """Stop the server gracefully."""
        if self._thread is None:
            return

        logger.info("Stopping API server...")
        if self._server:
            self._server.shutdown()
            self._server.server_close()

        if self._thread.is_alive():
            self._thread.join(timeout=5.0)

        self._server = None
        self._thread = None
        logger.info("API server stopped")

    @property
    def is_running(self) -> bool:
        """Check if the server is running."""
        return self._thread is not None and self._thread.is_alive()
