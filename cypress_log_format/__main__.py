#!/usr/bin/env python3
"""Module entrypoint for `cypress_log_format`.

Usage:
  - `python3 -m cypress_log_format test-output.txt`
  - `cat test-output.txt | python3 -m cypress_log_format --html`
"""

from __future__ import annotations

from .cli import _cli


if __name__ == "__main__":
    raise SystemExit(_cli())
