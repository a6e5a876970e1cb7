from rna_nussinov_fold.io.sequence_io import InputError, read_sequence_file, validate_sequence

__all__ = [
    "InputError",
    "read_sequence_file",
    "validate_sequence",
]
