from __future__ import annotations
from typing import Final

# Minimum number of positions that must separate two paired indices.
# A pair (i, j) is only allowed when j - i > MIN_LOOP_LENGTH.
MIN_LOOP_LENGTH: Final[int] = 4

# ---- Pairing rules (RNA) -----------------------------------------------------

# Watson-Crick pairs only, in both orientations. No G-U wobble.
_RNA_COMPLEMENTARY_PAIRS: Final[frozenset[str]] = frozenset({"AU", "UA", "GC", "CG"})


def can_pair(base_i: str, base_j: str) -> bool:
    """
    Return True if nucleotide bases `base_i` and `base_j` are complementary.

    Only the canonical Watson-Crick pairs are accepted (A-U and G-C, in either
    order). Identical bases, G-U wobble pairs and any symbol outside the
    upper-case RNA alphabet return False.

    Parameters
    ----------
    base_i, base_j : str
        Single-character nucleotides. Expected in {A, U, G, C}.

    Returns
    -------
    bool
        True if (base_i, base_j) is in {AU, UA, GC, CG}; False otherwise.
    """
    if not isinstance(base_i, str) or not isinstance(base_j, str):
        return False

    if len(base_i) != 1 or len(base_j) != 1:
        return False

    return (base_i + base_j) in _RNA_COMPLEMENTARY_PAIRS


def loop_length(i: int, j: int) -> int:
    """
    Number of positions strictly between indices `i` and `j` (`j - i - 1`).
    """
    return j - i - 1


def is_min_loop_span(i: int, j: int, min_loop_length: int = MIN_LOOP_LENGTH) -> bool:
    """
    Check whether positions `i` and `j` are far enough apart to pair.

    Parameters
    ----------
    i, j : int
        Zero-based indices with i < j.
    min_loop_length : int, optional
        Minimum separation required between paired indices. Defaults to 4.

    Returns
    -------
    bool
        True if `j - i > min_loop_length`, else False.
    """
    return j - i > min_loop_length
