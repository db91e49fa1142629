"""Helper functions chaining the reference loaders, aggregator and writer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from .aggregation import aggregate_flow_log
from .core.config import Settings, get_settings
from .core.models import AggregationResult
from .logging import get_logger
from .reference import load_lookup_table, load_protocol_table
from .reporting import write_report

logger = get_logger(__name__)


def run_pipeline(
    protocol_file: str | Path,
    lookup_file: str | Path,
    flow_log_file: str | Path,
    output_file: Optional[str | Path] = None,
    *,
    settings: Optional[Settings] = None,
) -> AggregationResult:
    """Resolve protocols, build the lookup table, count the flow log and write the report.

    Each stage runs to completion before the next one starts and nothing is
    written if any input stage fails.
    """
    settings = settings or get_settings()
    output_path = Path(output_file or settings.default_output_path)

    logger.info(
        "Using protocol file %s, lookup file %s, flow log file %s, output file %s",
        protocol_file,
        lookup_file,
        flow_log_file,
        output_path,
    )

    protocols = load_protocol_table(
        protocol_file,
        skip_malformed=settings.skip_malformed,
        encoding=settings.encoding,
    )
    lookup = load_lookup_table(
        lookup_file,
        skip_malformed=settings.skip_malformed,
        encoding=settings.encoding,
        row_limit=settings.lookup_row_limit,
    )
    result = aggregate_flow_log(
        flow_log_file,
        protocols,
        lookup,
        skip_malformed=settings.skip_malformed,
        encoding=settings.encoding,
    )
    write_report(result, output_path, sort=settings.sort_report, encoding=settings.encoding)
    return result
