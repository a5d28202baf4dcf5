from .serialization import (
    parse_timestamp,
    parse_optional_timestamp,
    format_timestamp,
    load_aggregate,
    dump_aggregate,
)

__all__ = [
    "parse_timestamp",
    "parse_optional_timestamp",
    "format_timestamp",
    "load_aggregate",
    "dump_aggregate",
]
