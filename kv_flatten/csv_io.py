"""CSV export of flattened records.

Every flattened record is a ``{path: string}`` mapping, so a batch of them
forms a table whose columns are the union of the paths seen. Records
missing a path get an empty cell.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Dict, Iterable, List, Mapping


def csv_columns(records: Iterable[Mapping[str, str]], sort_keys: bool = False) -> List[str]:
    """Return the union of record paths, first-seen order unless ``sort_keys``."""
    columns: Dict[str, None] = {}
    for record in records:
        columns.update(dict.fromkeys(record))
    return sorted(columns) if sort_keys else list(columns)


def write_csv(
    records: Iterable[Mapping[str, str]],
    output_path: Path | str,
    delimiter: str = ",",
    sort_keys: bool = False,
) -> List[str]:
    """Write flattened records as CSV rows.

    Parameters
    ----------
    records : Iterable[Mapping[str, str]]
        Flattened records, one per row.
    output_path : Path | str
        Destination file; parent directories are created.
    delimiter : str, optional
        CSV field delimiter (default: ",").
    sort_keys : bool, optional
        Sort columns instead of keeping first-seen order (default: False).

    Returns
    -------
    List[str]
        The header columns written. An empty batch writes an empty file
        and returns no columns.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    rows = list(records)
    columns = csv_columns(rows, sort_keys=sort_keys)
    with path.open("w", newline="", encoding="utf-8") as handle:
        if not columns:
            return columns
        writer = csv.writer(handle, delimiter=delimiter)
        writer.writerow(columns)
        writer.writerows([row.get(column, "") for column in columns] for row in rows)
    return columns
