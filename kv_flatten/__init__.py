"""Flatten JSON-like values into ``{"a.b.c": "value"}`` string mappings.

Nested objects become delimited paths, arrays aggregate their values under
a single key, and the result is ready for form fields, query strings or
CSV export.
"""

from .accumulator import Accumulator
from .classifier import UNDEFINED, ValueKind, classify, to_str
from .csv_io import csv_columns, write_csv
from .flattener import build_output, flatten, flatten_records, flatten_to_key_value
from .options import FlattenOptions, load_options

__all__ = [
    "Accumulator",
    "FlattenOptions",
    "UNDEFINED",
    "ValueKind",
    "build_output",
    "classify",
    "csv_columns",
    "flatten",
    "flatten_records",
    "flatten_to_key_value",
    "load_options",
    "to_str",
    "write_csv",
]
