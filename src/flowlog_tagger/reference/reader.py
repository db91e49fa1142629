"""Shared CSV reading for the protocol and lookup reference files."""

from __future__ import annotations

from pathlib import Path
from typing import Type

import pandas as pd

from ..exceptions import ConfigurationError, ParseError
from ..logging import get_logger
from ..utils import ensure_readable

logger = get_logger(__name__)

# Extra column absorbing every field past the ones a loader consumes
_REST = "_rest"


def _fold_surplus(columns: int):
    def fold(fields: list[str]) -> list[str]:
        return fields[:columns] + [",".join(fields[columns:])]

    return fold


def _line_span(cells: list) -> int:
    return 1 + sum(cell.count("\n") for cell in cells if isinstance(cell, str))


def read_reference_csv(
    path: str | Path,
    *,
    columns: int,
    label: str,
    error_cls: Type[ParseError] = ParseError,
    encoding: str = "utf-8",
) -> list[tuple[int, list[str]]]:
    """Return ``(line_number, fields)`` for every data row of a reference file.

    The first row is a header and is skipped, as are blank rows. Quoting is
    honoured so quoted fields may contain commas or line breaks, and
    ``line_number`` is the physical line the row starts on. Rows may be
    wider than the header: only the first ``columns`` fields are returned.
    Trailing fields the row does not have are left out, so callers can tell
    a missing field from an empty one.
    """
    file_path = ensure_readable(path, label)
    names = [*range(columns), _REST]
    try:
        df = pd.read_csv(
            file_path,
            header=None,
            names=names,
            index_col=False,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=False,
            encoding=encoding,
            engine="python",
            on_bad_lines=_fold_surplus(columns),
        )
    except pd.errors.EmptyDataError:
        logger.warning("%s '%s' is empty", label, file_path)
        return []
    except pd.errors.ParserError as exc:
        raise error_cls(str(exc), path=file_path) from exc
    except UnicodeDecodeError as exc:
        raise ConfigurationError(
            f"{label} '{file_path}' is not valid {encoding}: {exc}"
        ) from exc
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {label} '{file_path}': {exc}") from exc

    rows: list[tuple[int, list[str]]] = []
    line_number = 1
    for index, cells in enumerate(df.itertuples(index=False, name=None)):
        start, line_number = line_number, line_number + _line_span(list(cells))
        if index == 0:
            continue
        if all(pd.isna(cell) or not cell.strip() for cell in cells):
            continue
        present = [cell for cell in cells[:columns] if not pd.isna(cell)]
        rows.append((start, present))

    logger.debug("Read %d data rows from %s '%s'", len(rows), label, file_path)
    return rows
