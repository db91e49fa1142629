"""Render aggregation results as the plain text tag/combination report."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from ..core.constants import (
    COMBINATION_SECTION_HEADERS,
    TAG_SECTION_HEADER,
    UNTAGGED,
)
from ..core.models import AggregationResult
from ..exceptions import ReportWriteError
from ..logging import get_logger

logger = get_logger(__name__)


def _sort_tags(tag_df: pd.DataFrame) -> pd.DataFrame:
    # Untagged always last, other tags case-insensitively
    return (
        tag_df.assign(_untagged=tag_df["Tag"].eq(UNTAGGED), _lower=tag_df["Tag"].str.lower())
        .sort_values(["_untagged", "_lower", "Tag"], kind="stable")
        .drop(columns=["_untagged", "_lower"])
    )


def _sort_combinations(combo_df: pd.DataFrame) -> pd.DataFrame:
    return combo_df.sort_values(["Port", "Protocol"], kind="stable")


def _rows_to_csv(df: pd.DataFrame) -> str:
    if df.empty:
        return ""
    return df.to_csv(index=False, header=False, lineterminator="\n")


def build_report_frames(
    result: AggregationResult, *, sort: bool = False
) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Return the tag and combination tables in report order."""
    tag_df, combo_df = result.to_frames()
    if sort:
        tag_df = _sort_tags(tag_df)
        combo_df = _sort_combinations(combo_df)
    return tag_df, combo_df


def format_report(result: AggregationResult, *, sort: bool = False) -> str:
    """Return the report text for ``result``.

    Row order follows first appearance unless ``sort`` is set, in which case
    tags are ordered by name (``Untagged`` last) and combinations by port
    then protocol.
    """
    tag_df, combo_df = build_report_frames(result, sort=sort)
    parts = [
        f"{TAG_SECTION_HEADER}\n",
        ",".join(tag_df.columns) + "\n",
        _rows_to_csv(tag_df),
        "\n",
        *(f"{header}\n" for header in COMBINATION_SECTION_HEADERS),
        ",".join(combo_df.columns) + "\n",
        "\n",
        _rows_to_csv(combo_df),
    ]
    return "".join(parts)


def write_report(
    result: AggregationResult,
    path: str | Path,
    *,
    sort: bool = False,
    encoding: str = "utf-8",
) -> Path:
    """Write the report for ``result`` to ``path`` and return the path.

    Raises :class:`ReportWriteError` if the file cannot be written.
    """
    output_path = Path(path)
    content = format_report(result, sort=sort)
    try:
        with output_path.open("w", encoding=encoding, newline="\n") as fh:
            fh.write(content)
    except OSError as exc:
        raise ReportWriteError(
            f"Cannot write report to '{output_path}': {exc}",
            suggestion="Check that the output directory exists and is writable.",
        ) from exc
    logger.info(
        "Wrote %d tag rows and %d combination rows to %s",
        len(result.tag_counts),
        len(result.port_protocol_counts),
        output_path,
    )
    return output_path
