"""Style specs and the two ways of rendering them (terminal SGR codes, HTML classes).

A `StyleSpec` is target-neutral. The renderers below are the only place that
knows about escape codes or CSS class names, so the terminal and HTML outputs
can never drift apart category-wise.
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import List, Optional, Sequence

# Foreground SGR codes (chalk-compatible; gray is "bright black").
ANSI_FG_CODES = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "gray": 90,
}

_SGR_BOLD = 1
_SGR_DIM = 2
_SGR_UNDERLINE = 4
_SGR_BOLD_DIM_OFF = 22
_SGR_UNDERLINE_OFF = 24
_SGR_FG_OFF = 39


@dataclass(frozen=True)
class StyleSpec:
    color: Optional[str] = None
    bold: bool = False
    underline: bool = False
    dim: bool = False

    def __or__(self, other: "StyleSpec") -> "StyleSpec":
        return StyleSpec(
            color=other.color or self.color,
            bold=self.bold or other.bold,
            underline=self.underline or other.underline,
            dim=self.dim or other.dim,
        )

    @property
    def is_empty(self) -> bool:
        return not (self.color or self.bold or self.underline or self.dim)


# Shorthands used by the rule catalog.
GREEN = StyleSpec(color="green")
RED = StyleSpec(color="red")
YELLOW = StyleSpec(color="yellow")
BLUE = StyleSpec(color="blue")
MAGENTA = StyleSpec(color="magenta")
CYAN = StyleSpec(color="cyan")
GRAY = StyleSpec(color="gray")
WHITE = StyleSpec(color="white")
BOLD = StyleSpec(bold=True)
DIM = StyleSpec(dim=True)
UNDERLINE = StyleSpec(underline=True)


def sgr(codes: Sequence[int]) -> str:
    if not codes:
        return ""
    return "\x1b[" + ";".join(str(c) for c in codes) + "m"


def ansi_open_codes(style: StyleSpec) -> List[int]:
    codes: List[int] = []
    if style.bold:
        codes.append(_SGR_BOLD)
    if style.dim:
        codes.append(_SGR_DIM)
    if style.underline:
        codes.append(_SGR_UNDERLINE)
    if style.color:
        codes.append(ANSI_FG_CODES[style.color])
    return codes


def ansi_close_codes(style: StyleSpec) -> List[int]:
    codes: List[int] = []
    if style.bold or style.dim:
        codes.append(_SGR_BOLD_DIM_OFF)
    if style.underline:
        codes.append(_SGR_UNDERLINE_OFF)
    if style.color:
        codes.append(_SGR_FG_OFF)
    return codes


def paint(text: str, style: StyleSpec) -> str:
    """Wrap `text` in the SGR codes for `style` (for one-off CLI messages)."""
    return sgr(ansi_open_codes(style)) + text + sgr(ansi_close_codes(style))


def css_classes(style: StyleSpec) -> List[str]:
    """CSS classes for a style, in `ansi-<color> bold underline dim` order."""
    classes: List[str] = []
    if style.color:
        classes.append(f"ansi-{style.color}")
    if style.bold:
        classes.append("bold")
    if style.underline:
        classes.append("underline")
    if style.dim:
        classes.append("dim")
    return classes


def html_span_open(classes: Sequence[str]) -> str:
    return f'<span class="{" ".join(classes)}">'


HTML_SPAN_CLOSE = "</span>"


def escape_html(text: str) -> str:
    # Only &, <, > (quotes are harmless in element content).
    return html.escape(text or "", quote=False)


class TerminalRenderer:
    """Render spans as SGR codes.

    Closing a nested span turns its attributes off, which may also switch off
    an attribute an enclosing span set; the enclosing styles are re-emitted.
    """

    def escape(self, text: str) -> str:
        return text

    def open(self, style: StyleSpec, enclosing: Sequence[StyleSpec]) -> str:
        return sgr(ansi_open_codes(style))

    def close(self, style: StyleSpec, enclosing: Sequence[StyleSpec]) -> str:
        out = sgr(ansi_close_codes(style))
        restore: List[int] = []
        for outer in enclosing:
            restore.extend(ansi_open_codes(outer))
        return out + sgr(restore)


class HtmlRenderer:
    """Render spans as `<span class="...">` wrappers over escaped text."""

    def escape(self, text: str) -> str:
        return escape_html(text)

    def open(self, style: StyleSpec, enclosing: Sequence[StyleSpec]) -> str:
        return html_span_open(css_classes(style))

    def close(self, style: StyleSpec, enclosing: Sequence[StyleSpec]) -> str:
        return HTML_SPAN_CLOSE


TERMINAL = TerminalRenderer()
HTML = HtmlRenderer()
