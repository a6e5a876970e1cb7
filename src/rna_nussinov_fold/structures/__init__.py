from rna_nussinov_fold.structures.pairing import Pair
from rna_nussinov_fold.structures.tri_matrix import TriMatrix

__all__ = [
    "Pair",
    "TriMatrix",
]
