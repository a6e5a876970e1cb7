from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Set, Tuple

from rna_nussinov_fold.rules import MIN_LOOP_LENGTH, can_pair
from rna_nussinov_fold.structures import Pair


class StructureSymbol(str, Enum):
    """
    Per-position role in a secondary structure, valued by its dot-bracket glyph.

    UNPAIRED : position takes part in no pair.
    OPEN     : earlier (5') partner of a pair.
    CLOSE    : later (3') partner of a pair.
    """
    UNPAIRED = "."
    OPEN = "("
    CLOSE = ")"


@dataclass(frozen=True, slots=True)
class TraceResult:
    """
    A standard container for the results of a Nussinov traceback.

    Attributes
    ----------
    pairs : List[Pair]
        The base pairs of the reconstructed structure, sorted by the 5'
        index `i`.
    dot_bracket : str
        The dot-bracket rendering of the structure, one symbol per position.
    score : int
        The number of base pairs, i.e. the optimal score of the traced window.
    """
    pairs: List[Pair]
    dot_bracket: str
    score: int = 0

    @property
    def symbols(self) -> Tuple[StructureSymbol, ...]:
        """The annotation as a tuple of `StructureSymbol` members."""
        return tuple(StructureSymbol(ch) for ch in self.dot_bracket)


def pairs_to_dotbracket(seq_len: int, pairs: Sequence[Pair]) -> str:
    """
    Converts a list of base pairs into a dot-bracket string.

    Parameters
    ----------
    seq_len : int
        The total length of the RNA sequence.
    pairs : Sequence[Pair]
        The nested base pairs of the structure.

    Returns
    -------
    str
        The dot-bracket string, `.` for unpaired positions and `(`/`)` for
        the 5'/3' partners of each pair.
    """
    chars = [StructureSymbol.UNPAIRED.value] * seq_len
    for pr in pairs:
        i, j = pr.base_i, pr.base_j
        if 0 <= i < j < seq_len:
            chars[i] = StructureSymbol.OPEN.value
            chars[j] = StructureSymbol.CLOSE.value
    return ''.join(chars)


def dotbracket_to_pairs(db: str) -> Set[Tuple[int, int]]:
    """
    Parses a single-layer dot-bracket string into a set of base pairs.

    Parameters
    ----------
    db : str
        Dot-bracket string made of `.`, `(` and `)`.

    Returns
    -------
    Set[Tuple[int, int]]
        A set of `(i, j)` tuples with `i < j`.

    Raises
    ------
    ValueError
        If the brackets are unbalanced or an unknown symbol is present.
    """
    stack: List[int] = []
    out: Set[Tuple[int, int]] = set()
    for idx, ch in enumerate(db):
        if ch == StructureSymbol.OPEN.value:
            stack.append(idx)
        elif ch == StructureSymbol.CLOSE.value:
            if not stack:
                raise ValueError(f"Unmatched ')' at position {idx}.")
            out.add((stack.pop(), idx))
        elif ch != StructureSymbol.UNPAIRED.value:
            raise ValueError(f"Unknown dot-bracket symbol {ch!r} at position {idx}.")

    if stack:
        raise ValueError(f"Unmatched '(' at position {stack[-1]}.")
    return out


def validate_structure(seq: str, pairs: Sequence[Pair], min_loop_length: int = MIN_LOOP_LENGTH) -> List[str]:
    """
    Checks a set of pairs against the rules a Nussinov structure must obey.

    The checks are: each pair lies inside the sequence with `i < j`, its bases
    are complementary, its partners are more than `min_loop_length` apart, no
    position belongs to two pairs, and no two pairs cross.

    Parameters
    ----------
    seq : str
        The folded RNA sequence.
    pairs : Sequence[Pair]
        The pairs to check.
    min_loop_length : int, optional
        Minimum separation between paired indices, by default 4.

    Returns
    -------
    List[str]
        One message per violation. An empty list means the structure is valid.
    """
    problems: List[str] = []
    seen: dict[int, Pair] = {}

    for pr in pairs:
        i, j = pr.base_i, pr.base_j
        if not 0 <= i < j < len(seq):
            problems.append(f"pair ({i}, {j}) is out of range for length {len(seq)}")
            continue
        if not can_pair(seq[i], seq[j]):
            problems.append(f"pair ({i}, {j}) is not complementary ({seq[i]}-{seq[j]})")
        if j - i <= min_loop_length:
            problems.append(f"pair ({i}, {j}) encloses fewer than {min_loop_length} positions")
        for pos in (i, j):
            if pos in seen:
                problems.append(f"position {pos} is used by both {seen[pos].as_tuple()} and ({i}, {j})")
            else:
                seen[pos] = pr

    ordered = sorted(pairs, key=lambda p: (p.base_i, p.base_j))
    for a_idx, first in enumerate(ordered):
        for second in ordered[a_idx + 1:]:
            if second.base_i >= first.base_j:
                break
            if first.crosses(second):
                problems.append(f"pairs {first.as_tuple()} and {second.as_tuple()} cross")

    return problems
