"""Tag and port/protocol counting over version 2 flow-log records."""

from __future__ import annotations

from collections import Counter
from contextlib import closing
from pathlib import Path
from typing import Dict, Iterable, Iterator, Optional

from ..core.constants import (
    DSTPORT_FIELD_INDEX,
    MIN_FLOW_LOG_FIELDS,
    PROTOCOL_FIELD_INDEX,
    UNRESOLVED_PROTOCOL,
    UNTAGGED,
)
from ..core.decorators import log_performance
from ..core.models import (
    AggregationResult,
    FlowRecord,
    LookupTable,
    PortProtocol,
    ProtocolTable,
    seed_tag_counts,
)
from ..exceptions import ConfigurationError, FlowLogError
from ..logging import get_logger
from ..utils import ensure_readable, parse_non_negative_int

logger = get_logger(__name__)


def parse_flow_line(
    line: str, line_number: int = 0, source: Optional[str | Path] = None
) -> FlowRecord:
    """Return the destination port and protocol number of one flow-log line.

    Raises :class:`FlowLogError` when the line has fewer than eight fields or
    either field is not a non-negative integer.
    """
    parts = line.split()
    if len(parts) < MIN_FLOW_LOG_FIELDS:
        raise FlowLogError(
            f"expected at least {MIN_FLOW_LOG_FIELDS} fields, got {len(parts)}",
            path=source,
            line_number=line_number,
            suggestion="Only the default (version 2) flow log format is supported.",
        )
    try:
        dstport = parse_non_negative_int(parts[DSTPORT_FIELD_INDEX])
        protocol_number = parse_non_negative_int(parts[PROTOCOL_FIELD_INDEX])
    except ValueError as exc:
        raise FlowLogError(str(exc), path=source, line_number=line_number) from exc
    return FlowRecord(dstport, protocol_number, line_number)


def _iter_lines(path: Path, encoding: str) -> Iterator[tuple[int, str]]:
    try:
        with path.open("r", encoding=encoding) as fh:
            for line_number, line in enumerate(fh, start=1):
                if line.strip():
                    yield line_number, line
    except UnicodeDecodeError as exc:
        raise ConfigurationError(
            f"Flow log file '{path}' is not valid {encoding}: {exc}"
        ) from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read flow log file '{path}': {exc}") from exc


def iter_flow_records(path: str | Path, *, encoding: str = "utf-8") -> Iterator[FlowRecord]:
    """Lazily yield a :class:`FlowRecord` for every non-blank line of ``path``."""
    file_path = ensure_readable(path, "Flow log file")
    for line_number, line in _iter_lines(file_path, encoding):
        yield parse_flow_line(line, line_number, file_path)


class FlowAggregator:
    """Accumulate tag and port/protocol counts for one flow log.

    Tag counts are seeded with every lookup tag plus ``Untagged`` so tags
    that never match still appear in the report.
    """

    def __init__(self, protocols: ProtocolTable, lookup: LookupTable) -> None:
        self.protocols = protocols
        self.lookup = lookup
        self.tag_counts: Dict[str, int] = seed_tag_counts(lookup)
        self.port_protocol_counts: Counter[PortProtocol] = Counter()
        self.records_processed = 0
        self.records_skipped = 0

    def add(self, record: FlowRecord) -> None:
        """Count a single record."""
        protocol = self.protocols.resolve(record.protocol_number)
        tag = self.lookup.tag_for(protocol, record.dstport)

        if protocol is not None and tag is not None:
            self.tag_counts[tag] += 1
        else:
            self.tag_counts[UNTAGGED] += 1

        key = PortProtocol(record.dstport, protocol if protocol is not None else UNRESOLVED_PROTOCOL)
        self.port_protocol_counts[key] += 1
        self.records_processed += 1

    def skip(self) -> None:
        self.records_skipped += 1

    def result(self) -> AggregationResult:
        """Return a snapshot of the counts collected so far."""
        return AggregationResult(
            tag_counts=dict(self.tag_counts),
            port_protocol_counts=Counter(self.port_protocol_counts),
            records_processed=self.records_processed,
            records_skipped=self.records_skipped,
        )


def aggregate_records(
    records: Iterable[FlowRecord],
    protocols: ProtocolTable,
    lookup: LookupTable,
) -> AggregationResult:
    """Count already parsed ``records``."""
    aggregator = FlowAggregator(protocols, lookup)
    for record in records:
        aggregator.add(record)
    return aggregator.result()


@log_performance
def aggregate_flow_log(
    path: str | Path,
    protocols: ProtocolTable,
    lookup: LookupTable,
    *,
    skip_malformed: bool = False,
    encoding: str = "utf-8",
) -> AggregationResult:
    """Read ``path`` once and return its tag and port/protocol counts.

    Blank lines are ignored. A malformed line raises :class:`FlowLogError`
    unless ``skip_malformed`` is set, in which case it is logged, counted in
    ``records_skipped`` and left out of both tables.
    """
    file_path = ensure_readable(path, "Flow log file")
    aggregator = FlowAggregator(protocols, lookup)
    with closing(_iter_lines(file_path, encoding)) as lines:
        for line_number, line in lines:
            try:
                record = parse_flow_line(line, line_number, file_path)
            except FlowLogError as exc:
                if not skip_malformed:
                    raise
                logger.warning("Skipping flow log line: %s", exc)
                aggregator.skip()
                continue
            aggregator.add(record)

    result = aggregator.result()
    logger.info(
        "Processed %d flow records from %s (%d tagged, %d skipped)",
        result.records_processed,
        file_path,
        result.total_tagged(),
        result.records_skipped,
    )
    return result
