from rna_nussinov_fold.folding import (
    NussinovFoldingConfig,
    NussinovFoldingEngine,
    TraceResult,
    make_fold_state,
    traceback_nussinov,
)
from rna_nussinov_fold.rules import MIN_LOOP_LENGTH, can_pair

__all__ = [
    "MIN_LOOP_LENGTH",
    "NussinovFoldingConfig",
    "NussinovFoldingEngine",
    "TraceResult",
    "can_pair",
    "fold",
    "make_fold_state",
    "traceback_nussinov",
]


def fold(seq: str, min_loop_length: int = MIN_LOOP_LENGTH, fill_order: str = "bottom_up") -> TraceResult:
    """
    Folds a validated RNA sequence and returns one optimal structure.

    Parameters
    ----------
    seq : str
        Sequence over {A, U, G, C}. May be empty.
    min_loop_length : int, optional
        Minimum positions between paired bases, by default 4.
    fill_order : str, optional
        "bottom_up" (default) or "memoized".

    Returns
    -------
    TraceResult
        Pairs, dot-bracket string and pair count.
    """
    config = NussinovFoldingConfig(min_loop_length=min_loop_length, fill_order=fill_order)
    state = make_fold_state(len(seq), min_loop_length=min_loop_length)
    NussinovFoldingEngine(config=config).fill_matrix(seq, state)
    return traceback_nussinov(seq, state)
