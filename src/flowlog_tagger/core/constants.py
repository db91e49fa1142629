"""Centralized constant definitions for flowlog_tagger."""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Tag bookkeeping
# ---------------------------------------------------------------------------
UNTAGGED: str = "Untagged"
UNRESOLVED_PROTOCOL: str = "unknown"

# ---------------------------------------------------------------------------
# Flow log record layout (default version 2, space separated, no header)
# ---------------------------------------------------------------------------
DSTPORT_FIELD_INDEX: int = 6
PROTOCOL_FIELD_INDEX: int = 7
MIN_FLOW_LOG_FIELDS: int = PROTOCOL_FIELD_INDEX + 1

# ---------------------------------------------------------------------------
# Reference file layout
# ---------------------------------------------------------------------------
RANGE_SEPARATOR: str = "-"
LOOKUP_ROW_LIMIT: int = 10_000

# ---------------------------------------------------------------------------
# Report layout
# ---------------------------------------------------------------------------
TAG_SECTION_HEADER: str = "Tag Counts:"
TAG_COLUMNS: tuple[str, str] = ("Tag", "Count")
COMBINATION_SECTION_HEADERS: tuple[str, str] = (
    "Count of matches for each port/protocol combination:",
    "Port/Protocol Combination Counts:",
)
COMBINATION_COLUMNS: tuple[str, str, str] = ("Port", "Protocol", "Count")

DEFAULT_OUTPUT_PATH: str = "output.txt"

__all__ = [
    "UNTAGGED",
    "UNRESOLVED_PROTOCOL",
    "DSTPORT_FIELD_INDEX",
    "PROTOCOL_FIELD_INDEX",
    "MIN_FLOW_LOG_FIELDS",
    "RANGE_SEPARATOR",
    "LOOKUP_ROW_LIMIT",
    "TAG_SECTION_HEADER",
    "TAG_COLUMNS",
    "COMBINATION_SECTION_HEADERS",
    "COMBINATION_COLUMNS",
    "DEFAULT_OUTPUT_PATH",
]
