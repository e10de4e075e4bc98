"""Regex catalog for `cypress_log_format`.

Goal: keep regexes *discoverable* and *stable*.

Conventions:
- CAT_*    : per-substring categories (applied by `engine.RULES`, in catalog order)
- STRUCT_* : line-position rules (checked against the original, unstyled line)
- SGR_*    : terminal escape sequence detection / parsing

This module is intentionally "boring":
- no side effects
- no imports from other `cypress_log_format` modules (avoid cycles)
- grouped in *application order* (not alphabetized): order decides nesting depth
"""

from __future__ import annotations

import re
from typing import Pattern

#
# =============================================================================
# CAT_* (categories, in application order)
# =============================================================================
#

# 1. Result markers.
CAT_PASSING_RE: Pattern[str] = re.compile(r"✓|✅|\bPASS\b|\bpassed\b", re.IGNORECASE)
CAT_FAILING_RE: Pattern[str] = re.compile(r"✗|❌|\bFAIL(?:ED)?\b", re.IGNORECASE)
CAT_PENDING_RE: Pattern[str] = re.compile(r"⚠|\bpending\b|\bskipped\b", re.IGNORECASE)

# 2. Cypress commands. Only namespaced calls count: `cy.visit` yes, bare `visit` no.
CAT_CYPRESS_COMMAND_RE: Pattern[str] = re.compile(
    r"\bcy\.(?:visit|get|click|type|should|contains|wait|intercept)\b"
)

# 3. Assertion vocabulary.
CAT_ASSERTION_RE: Pattern[str] = re.compile(r"\b(?:should|expect|assert)\b", re.IGNORECASE)

# 4. Durations: `(123ms)` or bare `123ms`.
CAT_DURATION_RE: Pattern[str] = re.compile(r"\(\d+ms\)|\b\d+ms\b")

# 5. Timestamps: ISO-ish date, then (anywhere later on the line) an HH:MM:SS time.
# Greedy: the span runs to the *last* time within 200 chars of the date.
# The gap is bounded so a long line of dates with no time stays linear.
CAT_TIMESTAMP_RE: Pattern[str] = re.compile(r"\b\d{4}-\d{2}-\d{2}.{0,200}\d{2}:\d{2}:\d{2}\b")

# 6. URLs.
CAT_URL_RE: Pattern[str] = re.compile(r"https?://[^\s]+")

# 7. File paths: leading `/`, path segments, short lowercase extension.
# Not right after `:` or `/`, so `https://example.com` is not also a path.
# Body capped at 255 chars to keep long slash runs linear.
CAT_PATH_RE: Pattern[str] = re.compile(r"(?<![:/])/[\w\-.@/]{1,255}\.[a-z]{1,8}\b")

# 8. Log levels: bracketed tags (any case) or upper-case bare words.
CAT_LEVEL_INFO_RE: Pattern[str] = re.compile(r"(?i:\[info\])|\bINFO\b")
CAT_LEVEL_WARN_RE: Pattern[str] = re.compile(r"(?i:\[warn(?:ing)?\])|\bWARN(?:ING)?\b")
CAT_LEVEL_ERROR_RE: Pattern[str] = re.compile(r"(?i:\[error\])|\bERROR\b")
CAT_LEVEL_DEBUG_RE: Pattern[str] = re.compile(r"(?i:\[debug\])|\bDEBUG\b")

# 9. Softer "failed" (overlaps CAT_FAILING_RE on FAILED; both apply).
CAT_FAILED_WORD_RE: Pattern[str] = re.compile(r"\bfailed\b", re.IGNORECASE)

# 10. Symbols.
CAT_ARROW_RE: Pattern[str] = re.compile(r"→|->|=>")
CAT_BULLET_RE: Pattern[str] = re.compile(r"•|·")

# 11. Aggregate summary phrases.
CAT_SUMMARY_RE: Pattern[str] = re.compile(
    r"(?:"
    r"All specs passed!"
    r"|Some tests failed"
    r"|Tests completed"
    r")",
    re.IGNORECASE,
)

# 12. Aggregate counts: "15 passing", "2 failing", "1 pending".
CAT_SPEC_COUNTS_RE: Pattern[str] = re.compile(r"\b\d+ (?:passing|failing|pending)\b", re.IGNORECASE)

#
# =============================================================================
# STRUCT_* (line-position rules)
# =============================================================================
#

STRUCT_DESCRIBE_RE: Pattern[str] = re.compile(r"^\s*(?:describe|context)\s*\(")
STRUCT_IT_RE: Pattern[str] = re.compile(r"^\s*it\s*\(")

#
# =============================================================================
# SGR_* (terminal escape sequences)
# =============================================================================
#

# Introducer only; used once per whole input to pick the converter path.
SGR_INTRODUCER = "\x1b["

# Select Graphic Rendition: ESC [ <n;n;...> m. Anything else after ESC[ stays literal text.
SGR_SEQUENCE_RE: Pattern[str] = re.compile(r"\x1b\[((?:\d{1,3}(?:;\d{1,3})*)?)m")
