from __future__ import annotations
import logging
from typing import List, Tuple

from rna_nussinov_fold.folding.common_traceback import TraceResult, pairs_to_dotbracket
from rna_nussinov_fold.folding.nussinov_fold_state import NussinovFoldState
from rna_nussinov_fold.rules import can_pair
from rna_nussinov_fold.structures import Pair

logger = logging.getLogger(__name__)


def traceback_nussinov(seq: str, state: NussinovFoldState) -> TraceResult:
    """
    Reconstructs one optimal structure for the whole sequence.

    Parameters
    ----------
    seq : str
        The RNA sequence that was folded.
    state : NussinovFoldState
        The state filled by `NussinovFoldingEngine.fill_matrix` for `seq`.

    Returns
    -------
    TraceResult
        The pairs, dot-bracket string and pair count of the structure.
    """
    if not seq:
        return TraceResult(pairs=[], dot_bracket="", score=0)
    return _traceback_core(seq, state, seed_windows=[(0, len(seq) - 1)])


def traceback_nussinov_interval(seq: str, state: NussinovFoldState, i: int, j: int) -> TraceResult:
    """
    Reconstructs one optimal structure restricted to window `[i, j]`.

    The returned dot-bracket string spans the full sequence; positions outside
    the window are always unpaired.

    Parameters
    ----------
    seq : str
        The full RNA sequence.
    state : NussinovFoldState
        The filled state. Every cell the traceback reads must be computed,
        which holds for a bottom-up fill or when `(i, j)` was reached by a
        memoized fill.
    i : int
        The 5' start index of the window.
    j : int
        The 3' end index of the window.

    Returns
    -------
    TraceResult
        The pairs found within the window and a full-length dot-bracket string.
    """
    if not 0 <= i <= j < len(seq):
        raise IndexError(f"Window ({i}, {j}) is outside a sequence of length {len(seq)}.")
    return _traceback_core(seq, state, seed_windows=[(i, j)])


def _traceback_core(seq: str, state: NussinovFoldState, *, seed_windows: List[Tuple[int, int]]) -> TraceResult:
    """
    Stack-based replay of the Nussinov recurrence.

    Each popped window `(i, j)` is resolved by one of three rules:

    1. `j <= i` or `S(i, j) == 0`: nothing left to pair in the window.
    2. `S(i, j) == S(i, j-1)`: `j` is unpaired, continue with `(i, j-1)`.
    3. Otherwise `j` pairs with the smallest `t` in `[i, j-L-1]` such that
       `can_pair(t, j)` and `S(i, j) == 1 + S(i, t-1) + S(t+1, j-1)`. The
       pair `(t, j)` is recorded and both `(i, t-1)` and `(t+1, j-1)` are
       pushed.

    Scanning `t` in ascending order and taking the first match is the
    tie-break between equally good partners, so the same sequence always
    yields the same structure.

    Raises
    ------
    RuntimeError
        If no partner satisfies rule 3, meaning the matrix does not belong to
        this sequence or loop length.
    """
    min_loop = state.min_loop_length
    pairs: List[Pair] = []
    stack: List[Tuple[int, int]] = list(seed_windows)

    while stack:
        i, j = stack.pop()

        if j <= i:
            continue

        best = state.score(i, j)
        if best == 0:
            continue

        # Rule 2: j is left unpaired.
        if best == state.score(i, j - 1):
            stack.append((i, j - 1))
            continue

        # Rule 3: find the first partner t that reproduces the optimal score.
        base_j = seq[j]
        for t in range(i, j - min_loop):
            if not can_pair(seq[t], base_j):
                continue
            if best == 1 + state.score(i, t - 1) + state.score(t + 1, j - 1):
                pairs.append(Pair(t, j))
                stack.append((i, t - 1))
                stack.append((t + 1, j - 1))
                break
        else:
            raise RuntimeError(
                f"Inconsistent score matrix: no partner for position {j} reproduces S[{i},{j}]={best}."
            )

    ordered = sorted(pairs, key=lambda pr: (pr.base_i, pr.base_j))
    logger.debug(f"Traceback recovered {len(ordered)} pairs from windows {seed_windows}")

    return TraceResult(pairs=ordered, dot_bracket=pairs_to_dotbracket(len(seq), ordered), score=len(ordered))
