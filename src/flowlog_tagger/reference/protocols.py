"""Build the protocol number -> keyword table from a reference CSV.

The reference file follows the IANA ``protocol-numbers`` layout: the first
column is either a single protocol number or an inclusive ``start-end``
range, the second column is the keyword. Rows without a keyword are dropped
and later rows overwrite earlier ones for the same number.
"""

from __future__ import annotations

from itertools import count
from pathlib import Path
from typing import Dict, Iterable, Optional, Sequence

from ..core.constants import RANGE_SEPARATOR
from ..core.decorators import log_performance
from ..core.models import ProtocolTable
from ..exceptions import ProtocolTableError
from ..logging import get_logger
from ..utils import parse_non_negative_int
from .reader import read_reference_csv

logger = get_logger(__name__)

COLUMNS = 2


def parse_specifier(specifier: str) -> range:
    """Return the protocol numbers covered by ``specifier``.

    ``"6"`` covers one number, ``"146-252"`` covers every number in the
    inclusive range. A range whose start exceeds its end covers nothing.
    """
    specifier = specifier.strip()
    if RANGE_SEPARATOR in specifier:
        start_text, _, end_text = specifier.partition(RANGE_SEPARATOR)
        start = parse_non_negative_int(start_text)
        end = parse_non_negative_int(end_text)
        return range(start, end + 1)
    number = parse_non_negative_int(specifier)
    return range(number, number + 1)


def parse_protocol_rows(
    rows: Iterable[Sequence[str]],
    *,
    source: Optional[str | Path] = None,
    first_row_number: int = 2,
    line_numbers: Optional[Iterable[int]] = None,
    skip_malformed: bool = False,
) -> ProtocolTable:
    """Return a :class:`ProtocolTable` built from already split ``rows``."""
    entries: Dict[int, str] = {}
    skipped = 0
    numbers = count(first_row_number) if line_numbers is None else line_numbers
    for row_number, row in zip(numbers, rows):
        if len(row) < 2:
            error = ProtocolTableError(
                f"expected at least 2 fields, got {len(row)}",
                path=source,
                line_number=row_number,
            )
            if not skip_malformed:
                raise error
            logger.warning("Skipping protocol row: %s", error)
            skipped += 1
            continue

        keyword = row[1].strip().lower()
        if not keyword:
            continue

        try:
            numbers = parse_specifier(row[0])
        except ValueError as exc:
            error = ProtocolTableError(
                f"invalid protocol number or range {row[0]!r}: {exc}",
                path=source,
                line_number=row_number,
            )
            if not skip_malformed:
                raise error from exc
            logger.warning("Skipping protocol row: %s", error)
            skipped += 1
            continue

        if not numbers:
            logger.debug("Protocol range %r at row %d is empty", row[0], row_number)
        for number in numbers:
            entries[number] = keyword

    if skipped:
        logger.warning("Skipped %d malformed protocol rows", skipped)
    return ProtocolTable(entries)


@log_performance
def load_protocol_table(
    path: str | Path,
    *,
    skip_malformed: bool = False,
    encoding: str = "utf-8",
) -> ProtocolTable:
    """Read ``path`` and return the protocol number -> keyword table.

    Raises
    ------
    ConfigurationError
        If ``path`` is missing or unreadable.
    ProtocolTableError
        If a row is malformed and ``skip_malformed`` is false.
    """
    numbered = read_reference_csv(
        path,
        columns=COLUMNS,
        label="Protocol file",
        error_cls=ProtocolTableError,
        encoding=encoding,
    )
    table = parse_protocol_rows(
        [fields for _, fields in numbered],
        line_numbers=[number for number, _ in numbered],
        source=path,
        skip_malformed=skip_malformed,
    )
    logger.info("Loaded %d protocol numbers from %s", len(table), path)
    return table
