"""Tests for the command-line interface."""

import json
from pathlib import Path

import pytest

from kv_flatten.cli import main


@pytest.fixture
def input_file(tmp_path: Path) -> Path:
    """Write a small JSON document with an array of objects."""
    path = tmp_path / "input.json"
    path.write_text(
        json.dumps(
            {
                "order": {"id": 7},
                "items": [{"sku": "B", "qty": 1}, {"sku": "A", "qty": 1}],
                "note": None,
            }
        ),
        encoding="utf-8",
    )
    return path


def test_flatten_to_json(input_file: Path, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    """Test flattening a document to JSON."""
    output = tmp_path / "out" / "flat.json"
    assert main(["flatten", "--input", str(input_file), "--output", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8")) == {
        "order.id": "7",
        "items.sku": "B,A",
        "items.qty": "1,1",
    }
    assert "wrote 1 record(s)" in capsys.readouterr().out


def test_flatten_cli_flags(input_file: Path, tmp_path: Path) -> None:
    """Test CLI option flags."""
    output = tmp_path / "flat.json"
    main(
        [
            "flatten",
            "--input", str(input_file),
            "--output", str(output),
            "--delimiter", "/",
            "--joiner", "|",
            "--dedupe",
            "--sort-keys",
            "--include-null-undefined",
        ]
    )
    result = json.loads(output.read_text(encoding="utf-8"))
    assert list(result) == ["items/qty", "items/sku", "note", "order/id"]
    assert result["items/qty"] == "1"
    assert result["items/sku"] == "B|A"
    assert result["note"] == "null"


def test_flatten_with_config(input_file: Path, tmp_path: Path) -> None:
    """Test YAML config options, overridden by CLI flags."""
    config = tmp_path / "options.yml"
    config.write_text("options:\n  joiner: ';'\n  delimiter: _\n", encoding="utf-8")
    output = tmp_path / "flat.json"
    main(
        [
            "flatten",
            "--input", str(input_file),
            "--output", str(output),
            "--config", str(config),
            "--delimiter", ":",
        ]
    )
    result = json.loads(output.read_text(encoding="utf-8"))
    assert result["items:sku"] == "B;A"


def test_records_to_csv(tmp_path: Path, read_rows) -> None:
    """Test flattening each element into a CSV row."""
    input_path = tmp_path / "rows.json"
    input_path.write_text(
        json.dumps([{"id": 1, "tags": ["x", "y"]}, {"id": 2, "meta": {"ok": True}}]),
        encoding="utf-8",
    )
    output = tmp_path / "rows.csv"
    main(["records", "--input", str(input_path), "--output", str(output)])
    assert read_rows(output) == [
        {"id": "1", "tags": "x,y", "meta.ok": ""},
        {"id": "2", "tags": "", "meta.ok": "true"},
    ]


def test_records_to_json(tmp_path: Path) -> None:
    """Test records written as a JSON list."""
    input_path = tmp_path / "rows.json"
    input_path.write_text(json.dumps([{"a": {"b": 1}}, {"a": {"b": 2}}]), encoding="utf-8")
    output = tmp_path / "rows.json.out"
    main(["records", "--input", str(input_path), "--output", str(output)])
    assert json.loads(output.read_text(encoding="utf-8")) == [{"a.b": "1"}, {"a.b": "2"}]


def test_missing_input(tmp_path: Path) -> None:
    """Test a missing input file exits with an error."""
    with pytest.raises(SystemExit, match="input file not found"):
        main(["flatten", "--input", str(tmp_path / "nope.json"), "--output", str(tmp_path / "o.json")])


def test_invalid_json(tmp_path: Path) -> None:
    """Test malformed JSON exits with an error."""
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(SystemExit, match="invalid JSON"):
        main(["flatten", "--input", str(bad), "--output", str(tmp_path / "o.json")])


def test_scenarios_export(tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
    """Test the scenarios subcommand writes every scenario."""
    out_dir = tmp_path / "scenarios"
    assert main(["scenarios", "--output-dir", str(out_dir)]) == 0
    assert (out_dir / "list_of_objects_merge" / "output.csv").exists()
    assert "MISMATCH" not in capsys.readouterr().out
