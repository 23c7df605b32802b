"""Ingestion layer.

This package turns uploaded text into parsed records and the raw
location → platform multimap that the state layer closes and serves.
"""

from adplatforms.ingestion.assignments import AssignmentCollector, RawAssignments, acollect, collect
from adplatforms.ingestion.parser import parse_line, try_parse_line
from adplatforms.ingestion.reader import aiter_lines, iter_lines

__all__ = [
    "AssignmentCollector",
    "RawAssignments",
    "acollect",
    "aiter_lines",
    "collect",
    "iter_lines",
    "parse_line",
    "try_parse_line",
]
