"""
Error types for gcode-regions.

Only argument misuse is a hard failure. Content problems (unparseable
program text, missing anchors, no match in a buffer) degrade softly and are
reported through return values instead.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Raised when a required argument is missing or out of its domain."""

    pass
