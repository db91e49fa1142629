"""Custom exceptions for the :mod:`flowlog_tagger` package."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class FlowLogTaggerError(Exception):
    """Base class for all custom ``flowlog_tagger`` exceptions.

    Parameters
    ----------
    message:
        Short description of the failure.
    context:
        Optional additional information about where/why the error occurred.
    suggestion:
        Optional hint that may help recover from the error.
    """

    def __init__(
        self,
        message: str = "",
        *,
        context: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        super().__init__(message)
        self.context = context
        self.suggestion = suggestion


class ConfigurationError(FlowLogTaggerError):
    """Raised for missing/unreadable inputs, bad settings or a bad invocation."""


class ParseError(FlowLogTaggerError):
    """Raised when a reference row or flow-log line cannot be parsed.

    ``path`` and ``line_number`` locate the offending input when known.
    """

    def __init__(
        self,
        message: str = "",
        *,
        path: Optional[str | Path] = None,
        line_number: Optional[int] = None,
        context: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        self.path = str(path) if path is not None else None
        self.line_number = line_number
        location = ""
        if self.path is not None:
            location = self.path
            if line_number is not None:
                location += f":{line_number}"
        if location:
            message = f"{location}: {message}"
        super().__init__(message, context=context, suggestion=suggestion)


class ProtocolTableError(ParseError):
    """Raised when the protocol reference file contains a malformed row."""


class LookupTableError(ParseError):
    """Raised when the lookup reference file contains a malformed row."""


class FlowLogError(ParseError):
    """Raised when a flow-log line does not match the version 2 layout."""


class ReportWriteError(FlowLogTaggerError):
    """Raised when the report file cannot be written."""
