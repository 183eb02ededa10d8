from __future__ import annotations

import logging
from typing import Optional

from gcode_regions.config import AppConfig
from gcode_regions.normalize import normalize
from gcode_regions.search import NOT_FOUND, find_multi_line, find_single_line

LOG = logging.getLogger("regions.server")

try:
    from mcp.server.fastmcp import FastMCP
except ImportError as exc:  # pragma: no cover - dependency is optional at import time
    FastMCP = None
    _IMPORT_ERROR = exc
else:
    _IMPORT_ERROR = None


def _require_server(name: str) -> "FastMCP":
    if FastMCP is None:
        raise SystemExit(
            "The mcp package is required to run the server. "
            "Install it with `pip install gcode-regions[server]`."
        ) from _IMPORT_ERROR
    return FastMCP(name)


def _validate_required(name: str, value: Optional[str]) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValueError(f"Missing required field: {name}")


def _split_buffer(buffer_text: str) -> list[str]:
    return buffer_text.splitlines()


def build_server(config: Optional[AppConfig] = None) -> "FastMCP":
    config = config or AppConfig.from_env()
    server = _require_server(config.server.name)

    @server.tool(
            description="Return the canonical comparable form of one program line."
    )
    def normalize_line_tool(line: str) -> dict:
        return {"line": line, "normalized": normalize(line)}

    @server.tool(
            description="Find one stored line (anchored or plain) in program text; first or last match in a window."
    )
    def find_line_tool(
        bufferText: str,
        key: str,
        rangeStart: int = -1,
        rangeEnd: int = -1,
        preferLast: bool = False,
    ) -> dict:
        _validate_required("key", key)
        index = find_single_line(_split_buffer(bufferText or ""), key, rangeStart, rangeEnd, preferLast)
        return {"found": index != NOT_FOUND, "index": index}

    @server.tool(
            description="Find a region's anchored lines as a block in program text and count all occurrences."
    )
    def find_block_tool(
        bufferText: str,
        regionLines: list[str],
        rangeStart: int = -1,
        rangeEnd: int = -1,
    ) -> dict:
        if not regionLines:
            raise ValueError("Missing required field: regionLines")
        match = find_multi_line(_split_buffer(bufferText or ""), regionLines, rangeStart, rangeEnd)
        LOG.debug("find_block_tool: %s", match)
        return {
            "found": match.found,
            "startIndex": match.start_index,
            "endIndex": match.end_index,
            "matchCount": match.match_count,
        }

    return server


def main() -> None:
    config = AppConfig.from_env()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    server = build_server(config)
    server.run(transport=config.server.transport)


if __name__ == "__main__":
    main()
