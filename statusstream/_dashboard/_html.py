"""HTML page template for the dashboard.

This module loads the page template from dashboard.html and provides
a function to build the complete page by substituting styles, script and
the rendered report fragments.

The template is automatically reloaded when the file changes, so
``statusstream serve`` picks up template edits without a restart.
"""

from pathlib import Path
from string import Template

_TEMPLATE_PATH = Path(__file__).parent / "dashboard.html"

# Cache for template and its mtime
_template_cache: Template | None = None
_template_mtime: float = 0.0


def _get_template() -> Template:
    """Get the page template, reloading if the file changed.

    Returns:
        The current Template instance.
    """
    global _template_cache, _template_mtime

    current_mtime = _TEMPLATE_PATH.stat().st_mtime

    if _template_cache is None or current_mtime != _template_mtime:
        _template_cache = Template(_TEMPLATE_PATH.read_text(encoding="utf-8"))
        _template_mtime = current_mtime

    return _template_cache


def build_html(
    title: str,
    css: str,
    js_tooltip: str,
    reports: str,
    incidents: str,
    generated_at: str,
) -> str:
    """Build the complete dashboard page from its components.

    Values are substituted as-is; ``title`` and ``generated_at`` must already
    be HTML-escaped.

    Args:
        title: Page title
        css: CSS styles string
        js_tooltip: Tooltip script string
        reports: Rendered status containers
        incidents: Rendered incident panel, or an empty string
        generated_at: Human-readable generation time

    Returns:
        Complete HTML page string
    """
    return _get_template().safe_substitute(
        title=title,
        css=css,
        js_tooltip=js_tooltip,
        reports=reports,
        incidents=incidents,
        generated_at=generated_at,
    )
