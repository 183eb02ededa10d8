"""
Canonical form of one program line.

Stored region lines and live buffer lines are compared only after both have
been reduced to this form, so edits that change line numbers, spacing, case
or anchors do not break a match.

Examples:
    >>> normalize(" 12 : #abc,3#g0 x1 Y2 ")
    'G0X1Y2'
    >>> normalize("#lone tag")
    '#LONETAG'
"""

from __future__ import annotations

import re

LABEL_PREFIX_RE = re.compile(r"^\s*\d+\s*:\s*")


def strip_leading_anchor(text: str) -> str:
    """Drop one leading ``#...#`` block; a lone leading ``#`` is kept."""
    if text.startswith("#"):
        close = text.find("#", 1)
        if close > 0:
            return text[close + 1 :]
    return text


def _normalize_pass(text: str) -> str:
    text = text.strip()
    text = LABEL_PREFIX_RE.sub("", text, count=1)
    text = strip_leading_anchor(text)
    text = "".join(text.split())
    return text.upper()


def normalize(raw: str | None) -> str:
    """
    Reduce a raw line to its canonical comparable form.

    Trims, strips an optional ``"12:"`` label prefix and one leading anchor
    block, removes all whitespace and upper-cases. The pass is repeated until
    the text is stable, so a prefix or anchor uncovered by the first pass is
    removed as well and ``normalize`` is idempotent.

    Never raises; ``None`` and ``""`` both give ``""``.
    """
    if not raw:
        return ""

    text = _normalize_pass(raw)
    while True:
        again = _normalize_pass(text)
        if again == text:
            return text
        text = again
