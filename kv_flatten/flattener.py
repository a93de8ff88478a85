"""Core key/value flattening.

This module flattens JSON-like values into a single ``{path: string}``
mapping. Nested objects become delimited paths; arrays never add a path
segment, so every value that lands on the same path is collected and
joined into one string. This makes arrays of objects merge their matching
leaf paths::

    {"purchases": [{"sku": "X"}, {"sku": "Y"}]}  ->  {"purchases.sku": "X,Y"}
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from .accumulator import Accumulator
from .classifier import ValueKind, classify, is_scalar, iter_fields, to_str
from .options import FlattenOptions, resolve_options

logger = logging.getLogger(__name__)


def join_path(prefix: Optional[str], segment: str, delimiter: str = ".") -> str:
    """Append ``segment`` to ``prefix``; a None prefix denotes the root."""
    if prefix is None:
        return segment
    return f"{prefix}{delimiter}{segment}"


def flatten_to_key_value(
    data: Any,
    options: FlattenOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> Dict[str, str]:
    """Flatten JSON-like data into a single ``{path: value}`` string mapping.

    Parameters
    ----------
    data : Any
        JSON-like input (mapping, list, scalar, date or any other object).
    options : FlattenOptions | Mapping[str, Any] | None, optional
        Flattening options. A mapping may use field names or their
        camelCase spellings.
    **overrides
        Individual option values, applied on top of ``options``.

    Returns
    -------
    Dict[str, str]
        Flat mapping. A top-level scalar produces an empty mapping.

    Examples
    --------
    >>> flatten_to_key_value({"a": {"b": 1}, "tags": ["x", "y"]})
    {'a.b': '1', 'tags': 'x,y'}

    >>> flatten_to_key_value({"tags": ["a", "b", "b"]}, dedupe_array_values=True)
    {'tags': 'a,b'}
    """
    opts = resolve_options(options, **overrides)
    acc = Accumulator(dedupe=opts.dedupe_array_values)
    include = opts.include_null_undefined
    sep = opts.delimiter

    def _emit(value: Any, path: Optional[str]) -> None:
        text = to_str(value, include)
        if text is not None and path is not None:
            acc.add(path, text)

    def _walk_fields(obj: Any, path: Optional[str]) -> None:
        for key, value in iter_fields(obj):
            _walk(value, join_path(path, key, sep))

    def _walk(value: Any, path: Optional[str]) -> None:
        kind = classify(value)

        if kind is ValueKind.OBJECT:
            _walk_fields(value, path)
            return

        if kind is ValueKind.ARRAY:
            if all(is_scalar(item) for item in value):
                for item in value:
                    _emit(item, path)
                return
            for item in value:
                item_kind = classify(item)
                if item_kind is ValueKind.ARRAY:
                    # nested arrays collapse onto the same path
                    _walk(item, path)
                elif item_kind is ValueKind.OBJECT:
                    _walk_fields(item, path)
                else:
                    _emit(item, path)
            return

        # primitive, date and opaque values are leaves
        _emit(value, path)

    _walk(data, None)
    result = build_output(acc, opts.joiner, opts.sort_keys)
    logger.debug("flattened %d value(s) into %d key(s)", acc.value_count(), len(result))
    return result


def build_output(acc: Accumulator, joiner: str = ",", sort_keys: bool = False) -> Dict[str, str]:
    """Join each path's values and return the final mapping.

    Keys keep first-discovery order unless ``sort_keys`` is set, in which
    case they are ordered by plain string comparison.
    """
    entries = [(path, joiner.join(values)) for path, values in acc.items()]
    if sort_keys:
        entries.sort(key=lambda entry: entry[0])
    return dict(entries)


def flatten_records(
    data: Any,
    options: FlattenOptions | Mapping[str, Any] | None = None,
    **overrides: Any,
) -> List[Dict[str, str]]:
    """Flatten each record of ``data`` separately.

    Parameters
    ----------
    data : Any
        A list of records, or a single value treated as one record.
    options : FlattenOptions | Mapping[str, Any] | None, optional
        Flattening options shared by all records.
    **overrides
        Individual option values, applied on top of ``options``.

    Returns
    -------
    List[Dict[str, str]]
        One flat mapping per record, in input order.

    Examples
    --------
    >>> flatten_records([{"id": 1, "tags": ["a"]}, {"id": 2}])
    [{'id': '1', 'tags': 'a'}, {'id': '2'}]
    """
    opts = resolve_options(options, **overrides)
    records: List[Any]
    if isinstance(data, (list, tuple)):
        records = list(data)
    else:
        records = [data]
    return [flatten_to_key_value(record, opts) for record in records]


flatten = flatten_to_key_value
