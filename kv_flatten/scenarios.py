"""Scenario definitions for common flattening cases.

Each scenario pairs a JSON-like input and a set of options with the flat
mapping it is expected to produce. They double as documentation of the
array-merge and aggregation rules.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from .classifier import UNDEFINED, safe_text
from .csv_io import write_csv
from .flattener import flatten_to_key_value
from .options import FlattenOptions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scenario:
    """A flattening scenario.

    Attributes
    ----------
    name : str
        Unique identifier for the scenario.
    description : str
        Human-readable description of what the scenario shows.
    data : Any
        JSON-like data structure to flatten.
    expected : Dict[str, str]
        Flat mapping the data should produce.
    options : FlattenOptions, optional
        Options to flatten with (default: ``FlattenOptions()``).
    """
    name: str
    description: str
    data: Any
    expected: Dict[str, str]
    options: FlattenOptions = field(default_factory=FlattenOptions)


def get_scenarios() -> List[Scenario]:
    """Get all available flattening scenarios.

    Returns
    -------
    List[Scenario]
        List of scenario definitions covering the flattening rules.
    """
    purchases = {
        "purchases": [
            {"sku": "X", "qty": 1},
            {"sku": "Y", "qty": 2},
            {"sku": "X", "qty": 3},
        ]
    }
    return [
        Scenario(
            name="nested_objects",
            description="Nested objects become delimited paths.",
            data={"order": {"id": 42, "meta": {"source": "api"}}, "customer": "acme"},
            expected={"order.id": "42", "order.meta.source": "api", "customer": "acme"},
        ),
        Scenario(
            name="list_of_primitives",
            description="Array of primitives aggregated under one key.",
            data={"tags": ["a", "b", "b"], "active": True},
            expected={"tags": "a,b,b", "active": "true"},
        ),
        Scenario(
            name="list_of_primitives_dedupe",
            description="Repeated values dropped within one key.",
            data={"tags": ["a", "b", "b"]},
            expected={"tags": "a,b"},
            options=FlattenOptions(dedupe_array_values=True),
        ),
        Scenario(
            name="list_of_objects_merge",
            description="Array of objects merges matching leaf paths.",
            data=purchases,
            expected={"purchases.sku": "X,Y,X", "purchases.qty": "1,2,3"},
        ),
        Scenario(
            name="list_of_objects_merge_dedupe",
            description="Merged leaf paths with repeated values removed.",
            data=purchases,
            expected={"purchases.sku": "X,Y", "purchases.qty": "1,2,3"},
            options=FlattenOptions(dedupe_array_values=True),
        ),
        Scenario(
            name="nested_arrays",
            description="Nested arrays collapse onto the same key.",
            data={"matrix": [[1, 2], [3, [4]]], "mixed": [1, {"x": "a"}, [2, {"x": "b"}]]},
            expected={"matrix": "1,2,3,4", "mixed": "1,2", "mixed.x": "a,b"},
        ),
        Scenario(
            name="top_level_primitive",
            description="A bare scalar has no key to land on.",
            data=42,
            expected={},
        ),
        Scenario(
            name="null_and_undefined_skipped",
            description="Null and undefined values are skipped by default.",
            data={"a": None, "b": UNDEFINED, "c": [None, "x"]},
            expected={"c": "x"},
        ),
        Scenario(
            name="null_and_undefined_included",
            description="Null and undefined rendered as literal strings.",
            data={"a": None, "b": UNDEFINED},
            expected={"a": "null", "b": "undefined"},
            options=FlattenOptions(include_null_undefined=True),
        ),
        Scenario(
            name="dates",
            description="Dates rendered as ISO-8601 UTC timestamps.",
            data={
                "created_at": datetime(2024, 1, 15, 10, 30, 0, tzinfo=timezone.utc),
                "events": [{"at": datetime(2024, 1, 15, 11, 0, 0, 250000)}],
            },
            expected={
                "created_at": "2024-01-15T10:30:00.000Z",
                "events.at": "2024-01-15T11:00:00.250Z",
            },
        ),
        Scenario(
            name="sorted_keys",
            description="Keys ordered by plain string comparison.",
            data={"b": 1, "a": {"z": 2, "B": 3}},
            expected={"a.B": "3", "a.z": "2", "b": "1"},
            options=FlattenOptions(sort_keys=True),
        ),
        Scenario(
            name="custom_delimiter_and_joiner",
            description="Custom path delimiter and value joiner.",
            data={"a": {"b": 1}, "t": ["x", "y"]},
            expected={"a/b": "1", "t": "x|y"},
            options=FlattenOptions(delimiter="/", joiner="|"),
        ),
        Scenario(
            name="empty_containers",
            description="Empty objects and arrays contribute nothing.",
            data={"id": 1, "empty_list": [], "optional": {}, "nested": {"inner": []}},
            expected={"id": "1"},
        ),
    ]


def export_scenarios(out_dir: Path | str) -> Dict[str, bool]:
    """Write each scenario's input and flattened output under ``out_dir``.

    Every scenario gets its own directory holding ``input.json`` and
    ``output.csv``.

    Returns
    -------
    Dict[str, bool]
        Scenario name mapped to whether its output matched ``expected``.
    """
    root = Path(out_dir)
    results: Dict[str, bool] = {}
    for scenario in get_scenarios():
        scenario_dir = root / scenario.name
        scenario_dir.mkdir(parents=True, exist_ok=True)
        (scenario_dir / "input.json").write_text(
            json.dumps(scenario.data, indent=2, default=safe_text), encoding="utf-8"
        )

        record = flatten_to_key_value(scenario.data, scenario.options)
        write_csv([record], scenario_dir / "output.csv", sort_keys=scenario.options.sort_keys)
        results[scenario.name] = record == scenario.expected
        if not results[scenario.name]:
            logger.warning("scenario %s: got %r, expected %r", scenario.name, record, scenario.expected)
    return results
