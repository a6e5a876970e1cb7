from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Pair:
    """
    Immutable (i, j) index pair for a base pair in a predicted structure.

    Parameters
    ----------
    base_i : int
        Opening (5') index, 0-based.
    base_j : int
        Closing (3') index, 0-based, with base_j > base_i.

    Notes
    -----
    - `span` is the inclusive length (j - i + 1).
    - `loop_len` is the number of positions between `i` and `j` (`j - i - 1`).
    """
    base_i: int
    base_j: int

    @property
    def span(self) -> int:
        """Inclusive span length, ``j - i + 1``."""
        return self.base_j - self.base_i + 1

    @property
    def loop_len(self) -> int:
        """Number of positions enclosed by the pair, ``j - i - 1``."""
        return self.base_j - self.base_i - 1

    def as_tuple(self) -> tuple[int, int]:
        return self.base_i, self.base_j

    def shares_position(self, other: Pair) -> bool:
        """True if the two pairs use at least one common index."""
        return bool({self.base_i, self.base_j} & {other.base_i, other.base_j})

    def crosses(self, other: Pair) -> bool:
        """
        True if the two pairs form a pseudoknot-style crossing.

        Two pairs (i1, j1) and (i2, j2) with i1 < i2 cross when
        ``i1 < i2 < j1 < j2``. Nested and disjoint pairs do not cross.

        Parameters
        ----------
        other : Pair
            The pair to compare against.

        Returns
        -------
        bool
            True if the pairs interleave.
        """
        first, second = (self, other) if self.base_i <= other.base_i else (other, self)
        return first.base_i < second.base_i < first.base_j < second.base_j
