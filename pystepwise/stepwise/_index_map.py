"""
Position -> original column bookkeeping for stepwise elimination.

Every pruning round removes columns from the working design, so column
positions drift away from the caller's original ordering. IndexMap
records, for each current position, the original column it came from.
It is immutable: remove() returns a new map, and each iteration owns
the map it was handed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class IndexMap:
    """
    Mapping from current column position to original column index.

    Examples:
        >>> m = IndexMap.identity(4).remove([1])
        >>> m.originals
        (0, 2, 3)
        >>> m.original(1), m.position(3)
        (2, 2)
    """
    originals: tuple[int, ...]

    @classmethod
    def identity(cls, n: int) -> IndexMap:
        """Position i maps to original column i."""
        if n < 1:
            raise ValueError(f"IndexMap needs at least one column, got {n}")
        return cls(originals=tuple(range(n)))

    def __len__(self) -> int:
        return len(self.originals)

    def __iter__(self) -> Iterator[int]:
        return iter(self.originals)

    def original(self, position: int) -> int:
        """Original column index of the column currently at position."""
        if not 0 <= position < len(self.originals):
            raise IndexError(
                f"position {position} out of range [0, {len(self.originals)})"
            )
        return self.originals[position]

    def position(self, original: int) -> int:
        """
        Current position of an original column.

        Raises:
            KeyError: If the column has been removed
        """
        try:
            return self.originals.index(original)
        except ValueError:
            raise KeyError(f"original column {original} is no longer present") from None

    def remove(self, positions: Iterable[int]) -> IndexMap:
        """
        Drop the given current positions.

        Every later position shifts down by one per removed column; the
        original indices they map to are unchanged.
        """
        doomed = set(positions)
        for position in doomed:
            self.original(position)
        return IndexMap(originals=tuple(
            orig for pos, orig in enumerate(self.originals) if pos not in doomed
        ))
