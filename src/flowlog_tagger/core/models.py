"""Core data structures shared by the reference loaders and the aggregator."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, NamedTuple, Optional

import pandas as pd

from .constants import COMBINATION_COLUMNS, TAG_COLUMNS, UNTAGGED


class ProtocolTable:
    """Read-only mapping of protocol number to lowercase protocol keyword."""

    def __init__(self, entries: Optional[Mapping[int, str]] = None) -> None:
        self._entries: Mapping[int, str] = MappingProxyType(dict(entries or {}))

    def resolve(self, number: int) -> Optional[str]:
        """Return the keyword for ``number`` or ``None`` when it is unknown."""
        return self._entries.get(number)

    @property
    def entries(self) -> Mapping[int, str]:
        return self._entries

    def __contains__(self, number: object) -> bool:
        return number in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"ProtocolTable({len(self)} entries)"


class LookupTable:
    """Read-only two-level mapping: protocol keyword -> destination port -> tag."""

    def __init__(self, entries: Optional[Mapping[str, Mapping[int, str]]] = None) -> None:
        self._entries: Mapping[str, Mapping[int, str]] = MappingProxyType(
            {proto: MappingProxyType(dict(ports)) for proto, ports in (entries or {}).items()}
        )

    def tag_for(self, protocol: Optional[str], port: int) -> Optional[str]:
        """Return the tag for ``(protocol, port)``.

        An unknown or ``None`` protocol is treated as "no match".
        """
        if protocol is None:
            return None
        ports = self._entries.get(protocol)
        if ports is None:
            return None
        return ports.get(port)

    def tags(self) -> list[str]:
        """Return every distinct tag in first-seen order."""
        seen: Dict[str, None] = {}
        for ports in self._entries.values():
            for tag in ports.values():
                seen.setdefault(tag, None)
        return list(seen)

    @property
    def entries(self) -> Mapping[str, Mapping[int, str]]:
        return self._entries

    def __len__(self) -> int:
        return sum(len(ports) for ports in self._entries.values())

    def __repr__(self) -> str:
        return f"LookupTable({len(self._entries)} protocols, {len(self)} entries)"


class PortProtocol(NamedTuple):
    """Composite key for the port/protocol combination counts."""

    port: int
    protocol: str


@dataclass(frozen=True)
class FlowRecord:
    """The fields of a flow-log line that take part in tagging."""

    dstport: int
    protocol_number: int
    line_number: int = 0


def seed_tag_counts(lookup: LookupTable) -> Dict[str, int]:
    """Return zeroed counts for every lookup tag plus :data:`UNTAGGED`."""
    counts = {tag: 0 for tag in lookup.tags()}
    counts[UNTAGGED] = 0
    return counts


@dataclass
class AggregationResult:
    """Counts produced by a single aggregation pass over a flow log."""

    tag_counts: Dict[str, int] = field(default_factory=lambda: {UNTAGGED: 0})
    port_protocol_counts: Counter[PortProtocol] = field(default_factory=Counter)
    records_processed: int = 0
    records_skipped: int = 0

    def total_tagged(self) -> int:
        """Number of processed records that matched a lookup tag."""
        return self.records_processed - self.tag_counts.get(UNTAGGED, 0)

    def iter_tag_rows(self) -> Iterator[tuple[str, int]]:
        yield from self.tag_counts.items()

    def iter_combination_rows(self) -> Iterator[tuple[int, str, int]]:
        for key, count in self.port_protocol_counts.items():
            yield key.port, key.protocol, count

    def to_frames(self) -> tuple[pd.DataFrame, pd.DataFrame]:
        """Return ``(tag_df, combination_df)`` with the report column names."""
        tag_df = pd.DataFrame(list(self.iter_tag_rows()), columns=list(TAG_COLUMNS))
        combo_df = pd.DataFrame(
            list(self.iter_combination_rows()), columns=list(COMBINATION_COLUMNS)
        )
        return tag_df, combo_df
