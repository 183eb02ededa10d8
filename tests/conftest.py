"""
Shared test fixtures and pytest configuration.

Markers:
    @pytest.mark.server: requires the optional mcp package

Run without the server tests:
    pytest -m "not server"
"""

import importlib.util
import itertools

import pytest


def _mcp_available() -> bool:
    """Check if the optional mcp package is importable."""
    return importlib.util.find_spec("mcp") is not None


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "server: requires the optional mcp package")


def pytest_collection_modifyitems(config, items):
    """Auto-skip server tests when mcp is not installed."""
    if _mcp_available():
        return

    skip_server = pytest.mark.skip(reason="mcp package not installed")
    for item in items:
        if "server" in item.keywords:
            item.add_marker(skip_server)


@pytest.fixture
def uid_source():
    """Deterministic uids: U1, U2, ..."""
    counter = itertools.count(1)
    return lambda: f"U{next(counter)}"


@pytest.fixture
def turn_program():
    """Raw editor lines of a small lathe program, with label prefixes."""
    return [
        "1: G21 G40",
        "2: T0101",
        "3: G0 X50 Z2",
        "4: G1 X40 Z0 F0.2",
        "5: G1 X40 Z-20",
        "6: G1 X50 Z-30",
        "7: G0 X100 Z100",
        "8: M30",
    ]


@pytest.fixture
def profile_lines():
    """Raw lines of the captured turning profile (buffer lines 3..5 of turn_program)."""
    return [
        "G1 X40 Z0 F0.2",
        "G1 X40 Z-20",
        "G1 X50 Z-30",
    ]
