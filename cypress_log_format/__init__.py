"""
Cypress console formatter (annotation engine + escape-sequence converter).

This package contains the *implementation* for:
- semantic annotation of test-runner log lines (terminal colors or HTML spans)
- conversion of already-colorized (SGR) output to HTML spans
- the plumbing around them: CLI, remote fetch, permalinks, web UI

Public API is re-exported from:
- `cypress_log_format.engine` for the per-line annotator
- `cypress_log_format.ansi_html` for the escape-sequence converter
- `cypress_log_format.render` for whole-input dispatch and page rendering
"""

from .ansi_html import contains_escape, convert  # noqa: F401
from .engine import (  # noqa: F401
    RULES,
    PatternRule,
    annotate,
    annotate_html,
    annotate_terminal,
    annotate_text,
)
from .render import format_text, render_page  # noqa: F401
from .styles import StyleSpec  # noqa: F401

__all__ = [
    "RULES",
    "PatternRule",
    "StyleSpec",
    "annotate",
    "annotate_html",
    "annotate_terminal",
    "annotate_text",
    "contains_escape",
    "convert",
    "format_text",
    "render_page",
]
