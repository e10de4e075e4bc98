"""
Semantic annotator: ordered category rules -> styled spans -> terminal or HTML text.

Each line is handled on its own (no cross-line state). Rules are applied as a
fold over the ordered `RULES` tuple; every rule is an independent whole-line
pass, so overlapping matches from different rules all survive and nest in
rule order. Rules always match against the raw line text, so wrappers added
by earlier rules never hide text from later ones.

Rendering is separate from matching: the same `AnnotatedLine` renders to SGR
codes (`styles.TERMINAL`) or to `<span class="...">` markup (`styles.HTML`).
"""

from __future__ import annotations

import functools
import heapq
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Tuple

from . import regexes as R
from . import styles as S
from .styles import StyleSpec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternRule:
    name: str
    matcher: Pattern[str]
    style: StyleSpec


@dataclass(frozen=True)
class Span:
    start: int
    end: int
    style: StyleSpec
    # Application order; breaks ties between identical ranges (earlier = outer).
    order: int
    name: str = ""


@dataclass(frozen=True)
class AnnotatedLine:
    text: str
    spans: Tuple[Span, ...] = field(default_factory=tuple)

    def names(self) -> List[str]:
        return [s.name for s in self.spans]


#
# =============================================================================
# Rule catalog (ORDER IS A CONTRACT: it decides nesting depth)
# =============================================================================
#

RULES: Tuple[PatternRule, ...] = (
    # Test results
    PatternRule("passing", R.CAT_PASSING_RE, S.GREEN),
    PatternRule("failing", R.CAT_FAILING_RE, S.RED | S.BOLD),
    PatternRule("pending", R.CAT_PENDING_RE, S.YELLOW),
    # Cypress specific
    PatternRule("cypress-command", R.CAT_CYPRESS_COMMAND_RE, S.CYAN),
    PatternRule("assertion", R.CAT_ASSERTION_RE, S.MAGENTA),
    # Time and duration
    PatternRule("duration", R.CAT_DURATION_RE, S.GRAY),
    PatternRule("timestamp", R.CAT_TIMESTAMP_RE, S.BLUE),
    # URLs and paths
    PatternRule("url", R.CAT_URL_RE, S.BLUE | S.UNDERLINE),
    PatternRule("path", R.CAT_PATH_RE, S.YELLOW),
    # Log levels
    PatternRule("level-info", R.CAT_LEVEL_INFO_RE, S.BLUE),
    PatternRule("level-warn", R.CAT_LEVEL_WARN_RE, S.YELLOW),
    PatternRule("level-error", R.CAT_LEVEL_ERROR_RE, S.RED),
    PatternRule("level-debug", R.CAT_LEVEL_DEBUG_RE, S.GRAY),
    # Error-related words (less intense than test failures)
    PatternRule("failed-word", R.CAT_FAILED_WORD_RE, S.RED | S.DIM),
    # Special symbols
    PatternRule("arrow", R.CAT_ARROW_RE, S.CYAN),
    PatternRule("bullet", R.CAT_BULLET_RE, S.GRAY),
    # Test summary
    PatternRule("summary", R.CAT_SUMMARY_RE, S.GREEN | S.BOLD),
    PatternRule("spec-counts", R.CAT_SPEC_COUNTS_RE, S.BOLD),
)

# Line-position rules, checked on the original line after all categories.
# First match wins; the wrapper is always the outermost one.
# Their spans sort before any category span covering the same range.
STRUCTURE_ORDER = -1
STRUCTURE_RULES: Tuple[PatternRule, ...] = (
    PatternRule("describe", R.STRUCT_DESCRIBE_RE, S.WHITE | S.BOLD),
    PatternRule("it", R.STRUCT_IT_RE, S.WHITE),
)


#
# =============================================================================
# Matching (pure fold)
# =============================================================================
#


def apply_rule(line: AnnotatedLine, rule: PatternRule, order: int) -> AnnotatedLine:
    """Return `line` with one span added per match of `rule` (matched text untouched)."""
    found = tuple(
        Span(m.start(), m.end(), rule.style, order, rule.name)
        for m in rule.matcher.finditer(line.text)
        if m.end() > m.start()
    )
    if not found:
        return line
    return AnnotatedLine(line.text, line.spans + found)


def apply_structure(line: AnnotatedLine, order: int = STRUCTURE_ORDER) -> AnnotatedLine:
    if not line.text:
        return line
    for rule in STRUCTURE_RULES:
        if rule.matcher.search(line.text):
            whole = Span(0, len(line.text), rule.style, order, rule.name)
            return AnnotatedLine(line.text, line.spans + (whole,))
    return line


def annotate_spans(line: str) -> AnnotatedLine:
    """Run every category rule (in order) plus the structural pass over one line."""
    annotated = functools.reduce(
        lambda acc, step: apply_rule(acc, step[1], step[0]),
        enumerate(RULES),
        AnnotatedLine(line or ""),
    )
    return apply_structure(annotated)


#
# =============================================================================
# Rendering
# =============================================================================
#


def _heap_key(span: Span) -> Tuple[int, int, int]:
    # Earlier start first; wider first; on identical ranges the earlier rule is outer.
    return (span.start, -span.end, span.order)


def render_spans(line: AnnotatedLine, renderer) -> str:
    """Emit `line.text` with properly nested wrappers for every span.

    A span that starts inside an open span but ends past it is split at the
    enclosing span's end and its remainder reopened afterwards, so the output
    is always well-formed.
    """
    text = line.text
    heap: List[Tuple[Tuple[int, int, int], int, Span]] = []
    for i, span in enumerate(line.spans):
        heapq.heappush(heap, (_heap_key(span), i, span))
    tiebreak = len(line.spans)

    out: List[str] = []
    stack: List[Span] = []
    pos = 0
    while heap or stack:
        next_start: Optional[int] = heap[0][2].start if heap else None
        if stack and (next_start is None or stack[-1].end <= next_start):
            top = stack.pop()
            out.append(renderer.escape(text[pos : top.end]))
            pos = top.end
            out.append(renderer.close(top.style, [s.style for s in stack]))
            continue

        _, _, span = heapq.heappop(heap)
        if span.end <= span.start:
            continue
        out.append(renderer.escape(text[pos : span.start]))
        pos = span.start
        if stack and span.end > stack[-1].end:
            rest = Span(stack[-1].end, span.end, span.style, span.order, span.name)
            heapq.heappush(heap, (_heap_key(rest), tiebreak, rest))
            tiebreak += 1
            span = Span(span.start, stack[-1].end, span.style, span.order, span.name)
        out.append(renderer.open(span.style, [s.style for s in stack]))
        stack.append(span)

    out.append(renderer.escape(text[pos:]))
    return "".join(out)


def annotate_terminal(line: str) -> str:
    return render_spans(annotate_spans(line), S.TERMINAL)


def annotate_html(line: str) -> str:
    """HTML-escape and wrap one line; no `<pre>`/line-break handling."""
    return render_spans(annotate_spans(line), S.HTML)


def annotate(line: str, target: str = "terminal") -> str:
    if target == "html":
        return annotate_html(line)
    if target == "terminal":
        return annotate_terminal(line)
    raise ValueError(f"unknown target: {target!r} (expected 'terminal' or 'html')")


def annotate_text(text: str, target: str = "terminal") -> str:
    """Annotate every line of `text` independently; line breaks are kept as-is."""
    lines = (text or "").split("\n")
    logger.debug("annotating %d line(s) for %s output", len(lines), target)
    return "\n".join(annotate(ln, target) for ln in lines)
