from rna_nussinov_fold.rules.constraints import (
    MIN_LOOP_LENGTH,
    can_pair,
    is_min_loop_span,
    loop_length,
)

__all__ = [
    "MIN_LOOP_LENGTH",
    "can_pair",
    "is_min_loop_span",
    "loop_length",
]
