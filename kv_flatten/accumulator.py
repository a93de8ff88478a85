"""Per-path value accumulation."""

from __future__ import annotations

from typing import Dict, Iterator, List, Set, Tuple


class Accumulator:
    """Collect stringified values per path, in insertion order.

    Parameters
    ----------
    dedupe : bool, optional
        Skip values already recorded for the same path (default: False).
    """

    def __init__(self, dedupe: bool = False) -> None:
        self.dedupe = dedupe
        self._values: Dict[str, List[str]] = {}
        self._seen: Dict[str, Set[str]] = {}

    def add(self, path: str, value: str) -> None:
        """Append ``value`` to the sequence for ``path``.

        An empty path is ignored.
        """
        if not path:
            return
        values = self._values.get(path)
        if values is None:
            values = self._values[path] = []
            if self.dedupe:
                self._seen[path] = set()
        if self.dedupe:
            seen = self._seen[path]
            if value in seen:
                return
            seen.add(value)
        values.append(value)

    def items(self) -> Iterator[Tuple[str, List[str]]]:
        return iter(self._values.items())

    def __len__(self) -> int:
        return len(self._values)

    def value_count(self) -> int:
        """Total number of values recorded across all paths."""
        return sum(len(values) for values in self._values.values())
