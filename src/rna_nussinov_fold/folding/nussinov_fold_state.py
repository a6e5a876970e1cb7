from __future__ import annotations
from dataclasses import dataclass
from typing import Optional
import numpy as np

from rna_nussinov_fold.rules import MIN_LOOP_LENGTH
from rna_nussinov_fold.structures import TriMatrix


@dataclass(frozen=True, slots=True)
class NussinovFoldState:
    """
    Holds the score matrix for one Nussinov fold.

    The state is owned by a single fill pass. The folding engine writes cells
    through `set_score`; afterwards the traceback only reads them.

    Attributes
    ----------
    score_matrix : TriMatrix[Optional[int]]
        Upper-triangular table where cell `(i, j)` stores the maximum number of
        base pairs achievable among positions `i..j`. `None` marks a cell that
        has not been computed yet.
    min_loop_length : int
        Minimum separation between paired indices used when the matrix was
        filled. Windows with `j - i <= min_loop_length` can hold no pair and
        are never stored.
    """
    score_matrix: TriMatrix[Optional[int]]
    min_loop_length: int = MIN_LOOP_LENGTH

    @property
    def seq_len(self) -> int:
        return self.score_matrix.size

    def is_trivial(self, i: int, j: int) -> bool:
        """True if window `(i, j)` is empty or too short to hold any pair."""
        return j - i <= self.min_loop_length

    def is_computed(self, i: int, j: int) -> bool:
        """True if `score(i, j)` can be read without a fill step."""
        return self.is_trivial(i, j) or self.score_matrix.get(i, j) is not None

    def score(self, i: int, j: int) -> int:
        """
        Returns the optimal pair count of window `(i, j)`.

        Empty windows (`i > j`) and windows with `j - i <= min_loop_length`
        score 0 by convention.

        Raises
        ------
        LookupError
            If the window is non-trivial and has not been filled.
        """
        if self.is_trivial(i, j):
            return 0

        value = self.score_matrix.get(i, j)
        if value is None:
            raise LookupError(f"Score ({i}, {j}) read before it was computed.")
        return value

    def set_score(self, i: int, j: int, value: int) -> None:
        self.score_matrix.set(i, j, value)

    @property
    def total_score(self) -> int:
        """Optimal pair count of the whole sequence, 0 when it is empty."""
        if self.seq_len == 0:
            return 0
        return self.score(0, self.seq_len - 1)

    def as_array(self) -> np.ndarray:
        """
        Dense `(N, N)` copy of the score table for display.

        Trivial and lower-triangle cells read 0; non-trivial cells that were
        never computed (possible after a memoized fill) read -1.
        """
        dense = self.score_matrix.to_numpy(missing=-1)
        rows, cols = np.indices(dense.shape)
        dense[cols - rows <= self.min_loop_length] = 0
        return dense

    def computed_cells(self) -> int:
        """Number of non-trivial cells holding a value."""
        return sum(
            1 for i, j in self.score_matrix.iter_upper_indices()
            if not self.is_trivial(i, j) and self.score_matrix.get(i, j) is not None
        )


def make_fold_state(seq_len: int, min_loop_length: int = MIN_LOOP_LENGTH) -> NussinovFoldState:
    """
    Allocates an empty score matrix for a sequence of length `seq_len`.

    Parameters
    ----------
    seq_len : int
        The length of the RNA sequence (N).
    min_loop_length : int, optional
        Minimum separation between paired indices, by default 4.

    Returns
    -------
    NussinovFoldState
        A state whose every cell is `None` (not yet computed).

    Raises
    ------
    ValueError
        If `min_loop_length` is negative.
    """
    if min_loop_length < 0:
        raise ValueError(f"min_loop_length must be non-negative, got {min_loop_length}")

    return NussinovFoldState(
        score_matrix=TriMatrix[Optional[int]](seq_len, None),
        min_loop_length=min_loop_length,
    )
