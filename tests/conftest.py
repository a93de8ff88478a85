import csv
from pathlib import Path
from typing import Callable, Dict, List

import pytest


@pytest.fixture
def read_rows() -> Callable[[Path], List[Dict[str, str]]]:
    """Return a reader turning a written CSV file back into dict rows."""

    def _read(path: Path) -> List[Dict[str, str]]:
        with path.open("r", newline="", encoding="utf-8") as handle:
            return list(csv.DictReader(handle))

    return _read
