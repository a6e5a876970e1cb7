from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Tuple
import time
import logging

from tqdm import tqdm

from rna_nussinov_fold.folding.nussinov_fold_state import NussinovFoldState
from rna_nussinov_fold.rules import can_pair, MIN_LOOP_LENGTH

logger = logging.getLogger(__name__)

FILL_ORDERS: Tuple[str, ...] = ("bottom_up", "memoized")


@dataclass(slots=True)
class NussinovFoldingConfig:
    """
    Configuration settings for the Nussinov folding algorithm.

    Attributes
    ----------
    min_loop_length : int
        Minimum number of positions separating two paired indices. A pair
        (i, j) is allowed only when `j - i > min_loop_length`. Defaults to 4.
    fill_order : str
        `"bottom_up"` fills every cell by increasing window length.
        `"memoized"` fills top-down from the whole-sequence window and only
        computes the cells reachable from it.
    verbose : bool
        If True, enables verbose output, including a progress bar.
    """
    min_loop_length: int = MIN_LOOP_LENGTH
    fill_order: str = "bottom_up"
    verbose: bool = False

    def __post_init__(self) -> None:
        if self.min_loop_length < 0:
            raise ValueError(f"min_loop_length must be non-negative, got {self.min_loop_length}")
        if self.fill_order not in FILL_ORDERS:
            raise ValueError(f"Unknown fill_order {self.fill_order!r}; expected one of {FILL_ORDERS}")


@dataclass(slots=True)
class NussinovFoldingEngine:
    """
    Implements the Nussinov base-pair maximization recurrence.

    For a window `(i, j)` with `j - i > L` (L being the minimum loop length):

        S(i, j) = max( S(i, j-1),
                       max_{i <= t <= j-L-1, can_pair(t, j)} 1 + S(i, t-1) + S(t+1, j-1) )

    and `S(i, j) = 0` for every shorter or empty window. The first term leaves
    `j` unpaired; the second pairs `j` with some left partner `t`.

    Attributes
    ----------
    config : NussinovFoldingConfig
        Minimum loop length, fill order and verbosity.
    """
    config: NussinovFoldingConfig = field(default_factory=NussinovFoldingConfig)

    def fill_matrix(self, seq: str, state: NussinovFoldState) -> None:
        """
        Populates the score matrix of `state` for sequence `seq`.

        After this call `state.total_score` holds the maximum number of
        non-crossing, complementary pairs over the whole sequence.

        Parameters
        ----------
        seq : str
            The RNA sequence to fold, already validated to {A, U, G, C}.
        state : NussinovFoldState
            A fresh state from `make_fold_state(len(seq), min_loop_length)`.

        Raises
        ------
        ValueError
            If the state was allocated for a different length or loop length.
        """
        n = len(seq)
        if state.seq_len != n:
            raise ValueError(f"Fold state has length {state.seq_len}, sequence has length {n}.")
        if state.min_loop_length != self.config.min_loop_length:
            raise ValueError(
                f"Fold state uses min_loop_length={state.min_loop_length}, "
                f"engine is configured with {self.config.min_loop_length}."
            )

        if n == 0:
            logger.info("Nussinov DP: empty sequence; nothing to fill.")
            return

        start_time = time.perf_counter()

        logger.info("=" * 60)
        logger.info(f"Nussinov DP ({self.config.fill_order}) for sequence length N={n}")
        logger.info(f"Expected complexity: O(N³) ≈ {n ** 3:,} operations")
        logger.info("=" * 60)

        if self.config.fill_order == "memoized":
            self._fill_memoized(seq, state)
        else:
            self._fill_bottom_up(seq, state)

        elapsed = time.perf_counter() - start_time
        logger.info(f"Nussinov DP completed in {elapsed:.2f}s ({elapsed * 1000:.0f}ms)")
        logger.info(f"Final S[0,{n - 1}] = {state.total_score} pairs")
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Computed cells: {state.computed_cells():,}")

    def _fill_bottom_up(self, seq: str, state: NussinovFoldState) -> None:
        """
        Fills every non-trivial cell by increasing window length `d = j - i`.

        A window of length `d` only depends on strictly shorter windows, so
        each cell's inputs are final by the time it is visited.
        """
        n = len(seq)
        min_loop = state.min_loop_length

        show_progress = self.config.verbose or logger.isEnabledFor(logging.INFO)
        span_iter = tqdm(range(min_loop + 1, n), desc="Nussinov DP", leave=True, disable=not show_progress)

        for d in span_iter:
            for i in range(0, n - d):
                j = i + d
                state.set_score(i, j, self._best_score(seq, i, j, state))

    def _fill_memoized(self, seq: str, state: NussinovFoldState) -> None:
        """
        Fills the cells reachable from `(0, N-1)` with an explicit work stack.

        A window stays on the stack until all of its dependencies are
        computed, then it is scored and popped. Cells no recurrence step asks
        for are left as `None`.
        """
        stack: List[Tuple[int, int]] = [(0, len(seq) - 1)]

        while stack:
            i, j = stack[-1]
            if state.is_computed(i, j):
                stack.pop()
                continue

            pending = [window for window in self._dependencies(seq, i, j, state) if not state.is_computed(*window)]
            if pending:
                stack.extend(pending)
                continue

            stack.pop()
            state.set_score(i, j, self._best_score(seq, i, j, state))

    @staticmethod
    def _dependencies(seq: str, i: int, j: int, state: NussinovFoldState) -> Iterator[Tuple[int, int]]:
        """Yields the sub-windows the recurrence reads for cell `(i, j)`."""
        yield i, j - 1
        for t in range(i, j - state.min_loop_length):
            if can_pair(seq[t], seq[j]):
                yield i, t - 1
                yield t + 1, j - 1

    @staticmethod
    def _best_score(seq: str, i: int, j: int, state: NussinovFoldState) -> int:
        """
        Evaluates the recurrence for a single non-trivial cell `(i, j)`.

        Returns
        -------
        int
            The larger of "j unpaired" and the best "j paired with t" option.
            An empty candidate set contributes nothing.
        """
        # Case 1: leave j unpaired.
        best = state.score(i, j - 1)

        # Case 2: pair j with a partner t at least min_loop_length + 1 positions to its left.
        base_j = seq[j]
        for t in range(i, j - state.min_loop_length):
            if not can_pair(seq[t], base_j):
                continue
            candidate = 1 + state.score(i, t - 1) + state.score(t + 1, j - 1)
            if candidate > best:
                best = candidate

        return best
