from __future__ import annotations
import numpy as np

from typing import Generic, TypeVar, List, Tuple, Iterator, Optional

T = TypeVar("T")


class TriMatrix(Generic[T]):
    """
    A memory-efficient, upper-triangular matrix for Nussinov DP tables.

    This class provides a 2D matrix-like interface but only allocates storage
    for the upper triangle (where `i <= j`), saving nearly half the memory
    compared to a full square matrix. Row `i` holds the `N - i` cells
    `(i, i)..(i, N-1)`.
    """
    __slots__ = ("_seq_len", "_rows")

    def __init__(self, seq_len: int, fill: T):
        if seq_len < 0:
            raise ValueError(f"TriMatrix size must be non-negative, got {seq_len}")
        self._seq_len = seq_len
        self._rows: List[List[T]] = [[fill for _ in range(seq_len - i)] for i in range(seq_len)]

    @property
    def size(self) -> int:
        """Returns the sequence length N that defines the matrix dimensions."""
        return self._seq_len

    @property
    def shape(self) -> Tuple[int, int]:
        """Returns the matrix shape as a tuple `(N, N)`."""
        return self._seq_len, self._seq_len

    def _offset(self, base_i: int, base_j: int) -> int:
        """Calculates the column offset within a row and validates indices."""
        if base_i < 0 or base_j < 0 or base_i >= self._seq_len or base_j >= self._seq_len or base_j < base_i:
            raise IndexError(f"TriMatrix invalid index: (i={base_i}, j={base_j}) for N={self._seq_len}")
        return base_j - base_i

    def get(self, base_i: int, base_j: int) -> T:
        """
        Retrieves the value at cell `(i, j)`.

        Parameters
        ----------
        base_i : int
            The row index (0-based).
        base_j : int
            The column index (0-based).

        Returns
        -------
        T
            The value stored at the specified cell.

        Raises
        ------
        IndexError
            If `(i, j)` is outside the upper triangle.
        """
        return self._rows[base_i][self._offset(base_i, base_j)]

    def set(self, base_i: int, base_j: int, value: T) -> None:
        """
        Sets the `value` at cell `(i, j)`.

        Parameters
        ----------
        base_i : int
            The row index (0-based).
        base_j : int
            The column index (0-based).
        value : T
            The value to store in the cell.
        """
        self._rows[base_i][self._offset(base_i, base_j)] = value

    def iter_upper_indices(self) -> Iterator[Tuple[int, int]]:
        """
        Yields all valid `(i, j)` index tuples in the upper triangle, row-major.
        """
        n = self._seq_len
        for i in range(n):
            for j in range(i, n):
                yield i, j

    def to_numpy(self, missing: Optional[int] = 0, dtype=np.int64) -> np.ndarray:
        """
        Copies the matrix into a dense square NumPy array.

        Lower-triangle cells are filled with 0. Upper-triangle cells holding
        `None` are replaced by `missing`.

        Parameters
        ----------
        missing : Optional[int], optional
            Substitute for `None` cells, by default 0.
        dtype : optional
            NumPy dtype of the result, by default `np.int64`.

        Returns
        -------
        np.ndarray
            An `(N, N)` array.
        """
        dense = np.zeros((self._seq_len, self._seq_len), dtype=dtype)
        for i, row in enumerate(self._rows):
            for offset, value in enumerate(row):
                dense[i, i + offset] = missing if value is None else value
        return dense
