from .protocols import load_protocol_table, parse_protocol_rows, parse_specifier
from .lookup import load_lookup_table, build_lookup_table

__all__ = [
    "load_protocol_table",
    "parse_protocol_rows",
    "parse_specifier",
    "load_lookup_table",
    "build_lookup_table",
]
