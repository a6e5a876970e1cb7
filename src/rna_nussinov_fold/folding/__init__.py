from rna_nussinov_fold.folding.common_traceback import StructureSymbol, TraceResult
from rna_nussinov_fold.folding.nussinov_fold_state import NussinovFoldState, make_fold_state
from rna_nussinov_fold.folding.nussinov_recurrences import NussinovFoldingConfig, NussinovFoldingEngine
from rna_nussinov_fold.folding.nussinov_traceback import traceback_nussinov, traceback_nussinov_interval

__all__ = [
    "StructureSymbol",
    "TraceResult",
    "NussinovFoldState",
    "make_fold_state",
    "NussinovFoldingConfig",
    "NussinovFoldingEngine",
    "traceback_nussinov",
    "traceback_nussinov_interval",
]
