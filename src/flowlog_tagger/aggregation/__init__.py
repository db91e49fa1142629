from .aggregator import (
    FlowAggregator,
    aggregate_flow_log,
    aggregate_records,
    iter_flow_records,
    parse_flow_line,
)

__all__ = [
    "FlowAggregator",
    "aggregate_flow_log",
    "aggregate_records",
    "iter_flow_records",
    "parse_flow_line",
]
