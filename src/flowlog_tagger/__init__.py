# src/flowlog_tagger/__init__.py
from .core.models import (
    AggregationResult,
    FlowRecord,
    LookupTable,
    PortProtocol,
    ProtocolTable,
)
from .reference import load_protocol_table, load_lookup_table
from .aggregation import aggregate_flow_log, aggregate_records, iter_flow_records
from .reporting import format_report, write_report
from .pipeline import run_pipeline
from .exceptions import (
    FlowLogTaggerError,
    ConfigurationError,
    ParseError,
    ReportWriteError,
)


__all__ = [
    "AggregationResult",
    "FlowRecord",
    "LookupTable",
    "PortProtocol",
    "ProtocolTable",
    "load_protocol_table",
    "load_lookup_table",
    "aggregate_flow_log",
    "aggregate_records",
    "iter_flow_records",
    "format_report",
    "write_report",
    "run_pipeline",
    "FlowLogTaggerError",
    "ConfigurationError",
    "ParseError",
    "ReportWriteError",
]
