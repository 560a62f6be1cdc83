"""HTML page assembly for the status history dashboard.

The page is a single static HTML file: styles and the tooltip script are
embedded, and the status streams are rendered server-side.
"""

from ._css import CSS_STYLES
from ._html import build_html
from ._js_tooltip import JS_TOOLTIP

__all__ = [
    "CSS_STYLES",
    "JS_TOOLTIP",
    "build_html",
]
