#!/usr/bin/env python3
"""
Predict RNA secondary structure by base-pair maximization from the command line.

This script reads an RNA sequence (inline or from a file), folds it with the
Nussinov algorithm and prints the optimal structure in dot-bracket notation.

Examples:
  - python predict_rna.py "GGGAAAUCCC"
  - python predict_rna.py --file read.txt
  - python predict_rna.py -vv --min-loop 3 --fill-order memoized --json "GGGAAAUCCC"
"""

# --- Standard Library Imports ---
from __future__ import annotations
import argparse
import json
import sys
import logging
import time
from typing import Optional, Tuple

# --- Third-Party Imports ---
import numpy as np
from tqdm.contrib.logging import logging_redirect_tqdm

# --- Local Application Imports ---
from rna_nussinov_fold.config import NussinovConfigLoader
from rna_nussinov_fold.folding import (
    NussinovFoldState,
    NussinovFoldingConfig,
    NussinovFoldingEngine,
    TraceResult,
    make_fold_state,
    traceback_nussinov,
)
from rna_nussinov_fold.io import InputError, read_sequence_file, validate_sequence
from rna_nussinov_fold.utils.logging_utils import DEFAULT_LOG_DIR, SILENT, setup_package_loggers

# Set up module logger
logger = logging.getLogger(__name__)


# --------------------------
# Logging Configuration
# --------------------------
def setup_cli_logging(verbose_level: int, log_file: Optional[str] = None, quiet: bool = False) -> None:
    """
    Configures logging for the application based on command-line arguments.

    Log records go to stderr so stdout carries only the structure (or JSON).

    Parameters
    ----------
    verbose_level : int
        The verbosity level: 0 for WARNING, 1 for INFO, 2 for DEBUG.
    log_file : Optional[str]
        The path to a specific log file. If not provided, a default timestamped
        log file is created in the `var/log/` directory when verbosity is > 0.
    quiet : bool
        Silence the console handlers entirely. A log file, if any, still
        receives records at `verbose_level`.
    """
    level_map = {
        0: logging.WARNING,
        1: logging.INFO,
        2: logging.DEBUG,
    }
    log_level = level_map.get(verbose_level, logging.DEBUG)

    should_log_to_file = (verbose_level > 0) or (log_file is not None)

    setup_package_loggers(
        level=log_level,
        log_file=log_file,
        enable_file_logging=should_log_to_file,
        console_level=SILENT if quiet else None,
        stream=sys.stderr,
    )

    if should_log_to_file and log_file is None:
        logger.info(f"Logs will be saved to: {DEFAULT_LOG_DIR.resolve()}")


# --------------------------
# Helpers
# --------------------------
def predict_nussinov(seq: str, config: NussinovFoldingConfig) -> Tuple[TraceResult, NussinovFoldState]:
    """
    Runs the Nussinov fill and traceback on a sequence.

    Parameters
    ----------
    seq : str
        The validated RNA sequence to fold.
    config : NussinovFoldingConfig
        Minimum loop length, fill order and verbosity.

    Returns
    -------
    Tuple[TraceResult, NussinovFoldState]
        The traced structure and the filled score matrix.
    """
    logger.info("=" * 60)
    logger.info("Using Nussinov (base-pair maximization) algorithm")
    logger.info("=" * 60)
    start_time = time.perf_counter()

    # 1. Allocate the score matrix and the engine.
    engine = NussinovFoldingEngine(config=config)
    state = make_fold_state(len(seq), min_loop_length=config.min_loop_length)

    # 2. Fill the score matrix.
    with logging_redirect_tqdm(loggers=[logging.getLogger("rna_nussinov_fold.folding.nussinov_recurrences")]):
        engine.fill_matrix(seq, state)

    # 3. Trace back one optimal structure.
    trace_result = traceback_nussinov(seq, state)

    elapsed = time.perf_counter() - start_time
    logger.info(f"Prediction completed in {elapsed:.2f}s")
    logger.info(f"Base pairs: {trace_result.score}")

    return trace_result, state


# --------------------------
# Command-Line Interface
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Predict RNA structure (dot-bracket) by Nussinov base-pair maximization."
    )
    parser.add_argument("sequence", nargs="?", default=None,
                        help="RNA sequence over A,U,G,C (omit when using --file).")
    parser.add_argument("-f", "--file", default=None,
                        help="Read the sequence from a plain-text or FASTA file.")
    parser.add_argument("--normalize", action="store_true",
                        help="Accept lowercase input and convert T to U.")
    parser.add_argument("--config", default=None,
                        help="Path to folding YAML (defaults to package data).")
    parser.add_argument("--min-loop", type=int, default=None,
                        help="Minimum positions between paired bases (default: from YAML, 4).")
    parser.add_argument("--fill-order", choices=["bottom_up", "memoized"], default=None,
                        help="Matrix fill strategy (default: from YAML, bottom_up).")
    parser.add_argument("--json", action="store_true",
                        help="Emit JSON instead of the bare dot-bracket line.")
    parser.add_argument("--print-matrix", action="store_true",
                        help="Also print the score matrix (-1 marks cells never computed).")

    # Logging arguments
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("--log-file", default=None,
                        help="Path to log file (default: var/log/<module>_TIMESTAMP.log if verbose)")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress all output except final result")
    return parser


def main(argv=None) -> int:
    """
    Parses command-line arguments and runs the prediction.
    """
    parser = build_parser()
    cli_args = parser.parse_args(argv)

    if (cli_args.sequence is None) == (cli_args.file is None):
        parser.error("provide exactly one of a sequence argument or --file")

    # --- Setup ---
    verbose_level = 0 if cli_args.quiet else cli_args.verbose
    setup_cli_logging(verbose_level, cli_args.log_file, quiet=cli_args.quiet)

    logger.info("=" * 60)
    logger.info("RNA Structure Prediction CLI")
    logger.info("=" * 60)

    # Read and validate the input sequence.
    try:
        if cli_args.file is not None:
            sequence = read_sequence_file(cli_args.file, normalize=cli_args.normalize)
        else:
            sequence = validate_sequence(cli_args.sequence, normalize=cli_args.normalize)
    except InputError as e:
        logger.error(f"Sequence validation failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Load the folding configuration, applying CLI overrides.
    try:
        config = NussinovConfigLoader().load(
            cli_args.config,
            min_loop_length=cli_args.min_loop,
            fill_order=cli_args.fill_order,
            verbose=True if verbose_level > 0 else None,
        )
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load folding configuration: {e}")
        print(f"Failed to load folding configuration: {e}", file=sys.stderr)
        return 1

    trace_result, state = predict_nussinov(sequence, config)

    # --- Output ---
    if cli_args.json:
        payload = {
            "sequence": sequence,
            "dot_bracket": trace_result.dot_bracket,
            "score": trace_result.score,
            "pairs": [list(pr.as_tuple()) for pr in trace_result.pairs],
            "length": len(sequence),
            "min_loop_length": config.min_loop_length,
        }
        if cli_args.print_matrix:
            payload["score_matrix"] = state.as_array().tolist()
        print(json.dumps(payload, indent=2))
    else:
        if cli_args.print_matrix:
            np.savetxt(sys.stdout, state.as_array(), fmt="%d")
        print(trace_result.dot_bracket)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
