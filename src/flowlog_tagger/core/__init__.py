from .config import settings, get_settings, load_settings, Settings
from .constants import *  # noqa: F401,F403
from .models import (
    AggregationResult,
    FlowRecord,
    LookupTable,
    PortProtocol,
    ProtocolTable,
    seed_tag_counts,
)
from ..exceptions import (
    FlowLogTaggerError,
    ConfigurationError,
    ParseError,
    ProtocolTableError,
    LookupTableError,
    FlowLogError,
    ReportWriteError,
)

__all__ = [
    "settings",
    "get_settings",
    "load_settings",
    "Settings",
    "AggregationResult",
    "FlowRecord",
    "LookupTable",
    "PortProtocol",
    "ProtocolTable",
    "seed_tag_counts",
    "FlowLogTaggerError",
    "ConfigurationError",
    "ParseError",
    "ProtocolTableError",
    "LookupTableError",
    "FlowLogError",
    "ReportWriteError",
] + [name for name in globals().keys() if name.isupper()]
