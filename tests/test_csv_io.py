"""Tests for CSV export."""

from pathlib import Path

from kv_flatten.csv_io import csv_columns, write_csv


def test_write_csv_headers_in_discovery_order(tmp_path: Path) -> None:
    """Test that CSV header follows first-seen path order."""
    output = tmp_path / "out.csv"
    assert write_csv([{"b": "1"}, {"a": "2"}], output) == ["b", "a"]
    assert output.read_text(encoding="utf-8").splitlines()[0] == "b,a"


def test_write_csv_sorted_headers(tmp_path: Path) -> None:
    """Test that CSV header can be sorted."""
    output = tmp_path / "out.csv"
    write_csv([{"b": "1"}, {"a": "2"}], output, sort_keys=True)
    assert output.read_text(encoding="utf-8").splitlines()[0] == "a,b"


def test_write_csv_creates_directories(tmp_path: Path) -> None:
    """Test that CSV writer creates parent directories."""
    output = tmp_path / "nested" / "dir" / "out.csv"
    write_csv([{"a": "1"}], str(output))
    assert output.exists()


def test_write_csv_missing_cells_empty(tmp_path: Path, read_rows) -> None:
    """Test records lacking a path get an empty cell."""
    output = tmp_path / "test.csv"
    write_csv([{"a": "1", "b": "x,y"}, {"a": "2"}], output)
    assert read_rows(output) == [{"a": "1", "b": "x,y"}, {"a": "2", "b": ""}]


def test_write_csv_custom_delimiter(tmp_path: Path) -> None:
    """Test a custom CSV delimiter."""
    output = tmp_path / "out.tsv"
    write_csv([{"a": "1", "b": "2"}], output, delimiter="\t")
    assert output.read_text(encoding="utf-8").splitlines() == ["a\tb", "1\t2"]


def test_write_csv_empty(tmp_path: Path) -> None:
    """Test an empty batch writes an empty file."""
    output = tmp_path / "empty.csv"
    assert write_csv([], output) == []
    assert output.read_text() == ""


def test_write_csv_only_empty_records(tmp_path: Path) -> None:
    """Test records with no paths produce no columns."""
    output = tmp_path / "empty.csv"
    assert write_csv([{}, {}], output) == []
    assert output.read_text() == ""


def test_csv_columns() -> None:
    """Test union of paths across records."""
    rows = [{"z": "1", "a": "2"}, {"a": "3", "m": "4"}]
    assert csv_columns(rows) == ["z", "a", "m"]
    assert csv_columns(rows, sort_keys=True) == ["a", "m", "z"]
