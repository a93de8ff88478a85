"""Command-line interface for key/value flattening."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, Sequence

from .csv_io import write_csv
from .flattener import flatten_records, flatten_to_key_value
from .options import FlattenOptions, load_options
from .scenarios import export_scenarios

logger = logging.getLogger(__name__)


def _load_json(path: Path) -> Any:
    if not path.exists():
        raise SystemExit(f"ERROR: input file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SystemExit(f"ERROR: invalid JSON in {path}: {exc}") from exc


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")


def _add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--input", required=True, type=Path, help="Path to JSON input")
    parser.add_argument("--output", required=True, type=Path, help="Path to output CSV/JSON")
    parser.add_argument("--config", default=None, type=Path, help="YAML file with flatten options")
    parser.add_argument("--delimiter", default=None, help="Path segment delimiter (default: .)")
    parser.add_argument("--joiner", default=None, help="String joining values under one key (default: ,)")
    parser.add_argument(
        "--include-null-undefined",
        action="store_true",
        default=None,
        help="Emit null values as the string 'null' instead of skipping them",
    )
    parser.add_argument(
        "--dedupe",
        dest="dedupe_array_values",
        action="store_true",
        default=None,
        help="Drop repeated values within one key",
    )
    parser.add_argument("--sort-keys", action="store_true", default=None, help="Sort output keys")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")


def build_options(args: argparse.Namespace) -> FlattenOptions:
    """Load options from ``--config`` and apply CLI overrides on top."""
    opts = load_options(args.config) if args.config else FlattenOptions()
    overrides: Dict[str, Any] = {}
    for name in ("delimiter", "joiner", "include_null_undefined", "dedupe_array_values", "sort_keys"):
        value = getattr(args, name)
        if value is not None:
            overrides[name] = value
    return opts.replace(**overrides)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Flatten JSON into key/value strings (CSV or JSON).")
    subparsers = parser.add_subparsers(dest="command", required=True)

    flat_parser = subparsers.add_parser("flatten", help="Flatten into a single record")
    _add_common_args(flat_parser)

    records_parser = subparsers.add_parser("records", help="Flatten each array element into its own record")
    _add_common_args(records_parser)

    scenarios_parser = subparsers.add_parser("scenarios", help="Export the built-in example scenarios")
    scenarios_parser.add_argument("--output-dir", default=Path("out/scenarios"), type=Path, help="Directory to write into")
    scenarios_parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "scenarios":
        results = export_scenarios(args.output_dir)
        for name, matched in results.items():
            print(f"{name}: wrote {args.output_dir / name} ({'ok' if matched else 'MISMATCH'})")
        return 0 if all(results.values()) else 1

    opts = build_options(args)
    logger.debug("options: %s", opts)
    data = _load_json(args.input)

    if args.command == "flatten":
        records = [flatten_to_key_value(data, opts)]
    else:
        records = flatten_records(data, opts)

    if args.output.suffix.lower() == ".csv":
        write_csv(records, args.output, sort_keys=opts.sort_keys)
    elif args.command == "flatten":
        _write_json(args.output, records[0])
    else:
        _write_json(args.output, records)

    print(f"wrote {len(records)} record(s) to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
