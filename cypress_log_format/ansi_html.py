"""Escape-sequence (SGR) to HTML converter.

Used only when the whole input already contains `ESC[` (e.g. Cypress output
captured with colors on). Single forward pass:

- text between sequences is HTML-escaped and placed under the currently open span
- each `ESC[<params>m` is decoded into attributes, applied in order to an
  `AttributeState`
- markup is a pure function of (open state, wanted state) at text boundaries:
  spans are opened lazily when text arrives, so back-to-back sequences produce
  one span and identical states coalesce
- an open span is closed exactly once at end of stream

Supported codes: reset (0), bold (1/22), underline (4/24), colors (30-37, 90-97),
default color (39). Everything else is ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Tuple, Union

from .regexes import SGR_INTRODUCER, SGR_SEQUENCE_RE
from .styles import HTML_SPAN_CLOSE, escape_html, html_span_open


@dataclass(frozen=True)
class Reset:
    pass


@dataclass(frozen=True)
class Bold:
    on: bool


@dataclass(frozen=True)
class Underline:
    on: bool


@dataclass(frozen=True)
class Color:
    # None means "default foreground" (SGR 39).
    name: Optional[str]


Attribute = Union[Reset, Bold, Underline, Color]

# Black renders as gray: the output is meant for a dark background.
_FG_COLOR_NAMES = {
    30: "gray",
    31: "red",
    32: "green",
    33: "yellow",
    34: "blue",
    35: "magenta",
    36: "cyan",
    37: "white",
}
_BRIGHT_OFFSET = 60


def decode_sgr(code: int) -> Optional[Attribute]:
    """Map one SGR parameter to an attribute, or None if unsupported."""
    if code == 0:
        return Reset()
    if code == 1:
        return Bold(True)
    if code == 22:
        return Bold(False)
    if code == 4:
        return Underline(True)
    if code == 24:
        return Underline(False)
    if code == 39:
        return Color(None)
    name = _FG_COLOR_NAMES.get(code) or _FG_COLOR_NAMES.get(code - _BRIGHT_OFFSET)
    if name:
        return Color(name)
    return None


def parse_params(raw: Optional[str]) -> List[int]:
    """`"1;32"` -> [1, 32]; empty parameter list means reset."""
    if not raw:
        return [0]
    out: List[int] = []
    for tok in raw.split(";"):
        if tok.isdigit():
            out.append(int(tok))
    return out


@dataclass(frozen=True)
class AttributeState:
    color: Optional[str] = None
    bold: bool = False
    underline: bool = False

    def apply(self, attr: Attribute) -> "AttributeState":
        if isinstance(attr, Reset):
            return AttributeState()
        if isinstance(attr, Bold):
            return replace(self, bold=attr.on)
        if isinstance(attr, Underline):
            return replace(self, underline=attr.on)
        if isinstance(attr, Color):
            return replace(self, color=attr.name)
        return self

    @property
    def is_plain(self) -> bool:
        return self.color is None and not self.bold and not self.underline

    def css_classes(self) -> List[str]:
        classes: List[str] = []
        if self.color:
            classes.append(f"ansi-{self.color}")
        if self.bold:
            classes.append("bold")
        if self.underline:
            classes.append("underline")
        return classes


PLAIN = AttributeState()


def contains_escape(text: str) -> bool:
    return SGR_INTRODUCER in (text or "")


# Extended colour introducers (fg, bg, underline colour) and how many
# arguments follow each selector: `5;n` (256-colour) or `2;r;g;b` (truecolor).
EXTENDED_COLOR_CODES = (38, 48, 58)
EXTENDED_COLOR_ARGS = {5: 1, 2: 3}


def apply_sequence(state: AttributeState, raw_params: Optional[str]) -> AttributeState:
    codes = parse_params(raw_params)
    i = 0
    while i < len(codes):
        code = codes[i]
        i += 1
        if code in EXTENDED_COLOR_CODES:
            # Not representable; skip its arguments so they are not read as codes.
            if i < len(codes):
                i += 1 + EXTENDED_COLOR_ARGS.get(codes[i], 0)
            continue
        attr = decode_sgr(code)
        if attr is not None:
            state = state.apply(attr)
    return state


def transition_markup(open_state: AttributeState, wanted: AttributeState) -> Tuple[str, AttributeState]:
    """Markup that moves from the open span (`open_state`) to `wanted`.

    Returns (markup, new open state). PLAIN means "no span open".
    """
    if open_state == wanted:
        return "", open_state
    markup = HTML_SPAN_CLOSE if not open_state.is_plain else ""
    if not wanted.is_plain:
        markup += html_span_open(wanted.css_classes())
    return markup, wanted


def convert(stream: str) -> str:
    """Convert SGR-colored text to escaped HTML with nested `<span class="...">`."""
    stream = stream or ""
    out: List[str] = []
    state = PLAIN
    open_state = PLAIN
    pos = 0

    def emit_text(chunk: str) -> None:
        nonlocal open_state
        if not chunk:
            return
        markup, open_state = transition_markup(open_state, state)
        out.append(markup)
        out.append(escape_html(chunk))

    try:
        for m in SGR_SEQUENCE_RE.finditer(stream):
            emit_text(stream[pos : m.start()])
            state = apply_sequence(state, m.group(1))
            pos = m.end()
        emit_text(stream[pos:])
    finally:
        if not open_state.is_plain:
            out.append(HTML_SPAN_CLOSE)
            open_state = PLAIN
    return "".join(out)
