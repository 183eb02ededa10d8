"""
Anchor codec for stored region lines.

An anchored line binds normalized program text to one version of a region
and to a 1-based position inside it:

    #<uid>,<local_index>#<payload>

All lines produced by the same build of a region share one uid.
"""

from __future__ import annotations

from uuid import uuid4

from gcode_regions.errors import InvalidArgumentError
from gcode_regions.normalize import normalize, strip_leading_anchor


def new_uid() -> str:
    """Return a fresh uid: 32 hex characters, never ``#``, ``,`` or spaces."""
    return uuid4().hex


def encode_anchor(uid: str, local_index: int, payload: str | None) -> str:
    """
    Build an anchored line.

    Args:
        uid: Region uid; must be a non-blank string
        local_index: 1-based position of the line within its build
        payload: Already-normalized line text, used as-is

    Raises:
        InvalidArgumentError: If uid is blank or local_index < 1
    """
    if not isinstance(uid, str) or not uid.strip():
        raise InvalidArgumentError("uid is blank")
    if isinstance(local_index, bool) or not isinstance(local_index, int):
        raise InvalidArgumentError(f"local_index must be an int, got {local_index!r}")
    if local_index < 1:
        raise InvalidArgumentError(f"local_index must be >= 1, got {local_index}")

    return f"#{uid},{local_index}#{payload or ''}"


def strip_anchor(text: str | None) -> str:
    """Return the payload of an anchored line, or the text unchanged."""
    if text is None:
        return ""
    return strip_leading_anchor(text)


def extract_uid(line: str | None) -> str | None:
    """
    Recover the uid from ``"#uid,n#payload"``.

    This is a soft lookup: anything that does not parse gives ``None``.
    """
    if line is None or not line.strip():
        return None

    text = line.strip()
    if not text.startswith("#"):
        return None

    comma = text.find(",", 1)
    if comma <= 1:
        return None

    if text.find("#", comma + 1) < 0:
        return None

    uid = text[1:comma].strip()
    return uid or None


def anchor_lines(uid: str, raw_lines) -> list[str]:
    """Normalize and anchor a block of raw lines at local indices 1..N."""
    return [encode_anchor(uid, index, normalize(raw)) for index, raw in enumerate(raw_lines, start=1)]
