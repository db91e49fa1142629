"""Build the (protocol keyword, destination port) -> tag lookup table."""

from __future__ import annotations

from itertools import count
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from ..core.constants import LOOKUP_ROW_LIMIT
from ..core.decorators import log_performance
from ..core.models import LookupTable
from ..exceptions import LookupTableError
from ..logging import get_logger
from ..utils import parse_non_negative_int
from .reader import read_reference_csv

logger = get_logger(__name__)

COLUMNS = 3


def _parse_lookup_row(row: Sequence[str]) -> tuple[int, str, str]:
    if len(row) < 3:
        raise ValueError(f"expected 3 fields (dstport,protocol,tag), got {len(row)}")
    port = parse_non_negative_int(row[0])
    protocol = row[1].strip()
    tag = row[2].strip()
    if not protocol:
        raise ValueError("protocol field is empty")
    if not tag:
        raise ValueError("tag field is empty")
    return port, protocol, tag


def build_lookup_table(
    rows: Iterable[Sequence[str]],
    *,
    source: Optional[str | Path] = None,
    first_row_number: int = 2,
    line_numbers: Optional[Iterable[int]] = None,
    skip_malformed: bool = False,
    row_limit: int = LOOKUP_ROW_LIMIT,
) -> LookupTable:
    """Return a :class:`LookupTable` built from already split ``rows``.

    Later rows overwrite earlier ones for the same (protocol, port) pair.
    Exceeding ``row_limit`` only logs a warning.
    """
    entries: Dict[str, Dict[int, str]] = {}
    row_count = 0
    skipped = 0
    numbers = count(first_row_number) if line_numbers is None else line_numbers
    for row_number, row in zip(numbers, rows):
        try:
            port, protocol, tag = _parse_lookup_row(row)
        except ValueError as exc:
            error = LookupTableError(str(exc), path=source, line_number=row_number)
            if not skip_malformed:
                raise error from exc
            logger.warning("Skipping lookup row: %s", error)
            skipped += 1
            continue

        entries.setdefault(protocol, {})[port] = tag
        row_count += 1

    if row_count > row_limit:
        logger.warning(
            "Lookup table has %d rows, above the supported %d", row_count, row_limit
        )
    if skipped:
        logger.warning("Skipped %d malformed lookup rows", skipped)
    return LookupTable(entries)


@log_performance
def load_lookup_table(
    path: str | Path,
    *,
    skip_malformed: bool = False,
    encoding: str = "utf-8",
    row_limit: int = LOOKUP_ROW_LIMIT,
) -> LookupTable:
    """Read ``path`` (``dstport,protocol,tag`` with a header) into a lookup table."""
    numbered = read_reference_csv(
        path,
        columns=COLUMNS,
        label="Lookup file",
        error_cls=LookupTableError,
        encoding=encoding,
    )
    table = build_lookup_table(
        [fields for _, fields in numbered],
        line_numbers=[number for number, _ in numbered],
        source=path,
        skip_malformed=skip_malformed,
        row_limit=row_limit,
    )
    logger.info(
        "Loaded %d lookup entries (%d distinct tags) from %s",
        len(table),
        len(table.tags()),
        path,
    )
    return table
