from __future__ import annotations
import logging
from pathlib import Path
from typing import Final

logger = logging.getLogger(__name__)

RNA_ALPHABET: Final[frozenset[str]] = frozenset("AUGC")


class InputError(ValueError):
    """Raised when a sequence or sequence file cannot be used for folding."""


def validate_sequence(raw_sequence: str, normalize: bool = False) -> str:
    """
    Validates an RNA sequence and returns it without whitespace.

    Parameters
    ----------
    raw_sequence : str
        The input sequence. Whitespace anywhere in it is ignored.
    normalize : bool, optional
        If True, convert to uppercase and replace 'T' with 'U' before
        validation. By default only upper-case A, U, G, C are accepted.

    Returns
    -------
    str
        The validated sequence. May be empty.

    Raises
    ------
    InputError
        If the sequence contains a character outside {A, U, G, C}.
    """
    sequence = "".join(raw_sequence.split())
    if normalize:
        sequence = sequence.upper().replace("T", "U")

    for pos, char in enumerate(sequence):
        if char not in RNA_ALPHABET:
            logger.error(f"Invalid character at position {pos}: '{char}'")
            raise InputError(f"Invalid character at position {pos} ('{char}'). Only A,U,G,C are allowed.")

    logger.info(f"Sequence validated: length={len(sequence)}")
    return sequence


def read_sequence_file(path: str | Path, normalize: bool = False) -> str:
    """
    Reads a single RNA sequence from a plain-text or FASTA-style file.

    Lines starting with '>' are treated as headers and skipped; all remaining
    lines are concatenated with whitespace removed.

    Parameters
    ----------
    path : str | Path
        Path to the sequence file.
    normalize : bool, optional
        Passed to `validate_sequence`.

    Returns
    -------
    str
        The validated sequence.

    Raises
    ------
    InputError
        If the file cannot be read, holds more than one FASTA record, or
        contains invalid characters.
    """
    path_obj = Path(path)
    try:
        text = path_obj.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputError(f"Could not open read input file <{path_obj}>: {exc}") from exc

    lines = text.splitlines()
    headers = [line for line in lines if line.startswith(">")]
    if len(headers) > 1:
        raise InputError(f"Input file <{path_obj}> holds {len(headers)} records; expected one sequence.")

    body = "".join(line for line in lines if not line.startswith(">"))
    logger.debug(f"Read {len(body)} characters from {path_obj}")

    try:
        return validate_sequence(body, normalize=normalize)
    except InputError as exc:
        raise InputError(f"Error reading in input file <{path_obj}>: {exc}") from exc
