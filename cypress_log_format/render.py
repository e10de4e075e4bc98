"""Dispatch (annotator vs converter) and full-page HTML rendering."""

from __future__ import annotations

import functools
import logging
from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from . import ansi_html
from . import engine

logger = logging.getLogger(__name__)

_THIS_DIR = Path(__file__).resolve().parent
PAGE_TEMPLATE = "formatter_page.j2"
DEFAULT_TITLE = "Cypress Console Formatter"

# Classes emitted by both the annotator (`styles.css_classes`) and the converter.
# Embedded into <style>. Dark background, so "black" is rendered gray.
ANSI_CLASS_CSS = """
.ansi-black, .ansi-gray { color: #8b949e; }
.ansi-red { color: #f85149; }
.ansi-green { color: #3fb950; }
.ansi-yellow { color: #d29922; }
.ansi-blue { color: #58a6ff; }
.ansi-magenta { color: #bc8cff; }
.ansi-cyan { color: #39c5cf; }
.ansi-white { color: #f0f6fc; }
.bold { font-weight: 700; }
.underline { text-decoration: underline; }
.dim { opacity: 0.7; }
""".strip()


def format_text(text: str, target: str = "html") -> str:
    """Format a whole input for `target` ("html" or "terminal").

    If the input already carries `ESC[` anywhere, it is not annotated: for HTML
    it goes once through the escape-sequence converter, for the terminal it is
    returned unchanged. Otherwise each line is annotated on its own.
    """
    text = text or ""
    if ansi_html.contains_escape(text):
        if target == "html":
            logger.debug("input has escape sequences; converting instead of annotating")
            return ansi_html.convert(text)
        if target == "terminal":
            logger.debug("input has escape sequences; passing through unchanged")
            return text
    return engine.annotate_text(text, target)


@functools.lru_cache(maxsize=1)
def _jinja_env() -> Environment:
    return Environment(
        loader=FileSystemLoader(str(_THIS_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def render_page(
    output_html: str = "",
    *,
    input_text: str = "",
    interactive: bool = True,
    title: Optional[str] = None,
) -> str:
    """Render the formatter page.

    `output_html` must already be safe markup (from `format_text(..., "html")`);
    `input_text` is raw and gets escaped by the template.
    Interactive pages carry the web UI controls; static pages are standalone reports.
    """
    template = _jinja_env().get_template(PAGE_TEMPLATE)
    return template.render(
        page_title=str(title or DEFAULT_TITLE),
        ansi_css=Markup(ANSI_CLASS_CSS),
        output_html=Markup(output_html or ""),
        input_text=str(input_text or ""),
        interactive=bool(interactive),
    )
