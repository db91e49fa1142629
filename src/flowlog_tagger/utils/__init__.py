"""Small input helpers shared by the reference loaders and the aggregator."""

from __future__ import annotations

from pathlib import Path

from ..exceptions import ConfigurationError


def ensure_readable(path: str | Path, label: str) -> Path:
    """Return ``path`` as a :class:`Path`, raising if it is not an existing file."""
    file_path = Path(path)
    if not file_path.is_file():
        raise ConfigurationError(
            f"{label} '{file_path}' does not exist or is not a file",
            suggestion="Check the path passed on the command line.",
        )
    return file_path


def parse_non_negative_int(text: str) -> int:
    """Return ``text`` as an ``int``, accepting only ASCII decimal digits.

    Surrounding whitespace is ignored. Raises :class:`ValueError` for signs,
    underscores, empty strings and anything else :func:`int` would tolerate.
    """
    value = text.strip()
    if not value or not (value.isascii() and value.isdigit()):
        raise ValueError(f"expected a non-negative integer, got {text!r}")
    return int(value)


__all__ = ["ensure_readable", "parse_non_negative_int"]
