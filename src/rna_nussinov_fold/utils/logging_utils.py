import logging
import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple
from datetime import datetime

DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# Modules that log during a fold, configured together by the CLI.
PACKAGE_LOGGERS: Tuple[str, ...] = (
    "rna_nussinov_fold.scripts.predict_rna",
    "rna_nussinov_fold.config.config_loader",
    "rna_nussinov_fold.folding.nussinov_recurrences",
    "rna_nussinov_fold.folding.nussinov_traceback",
    "rna_nussinov_fold.io.sequence_io",
)

# Above CRITICAL: a console handler at this level prints nothing.
SILENT = logging.CRITICAL + 10


def get_log_file_path(
        module_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Builds the path of a log file for a module or run, creating its directory.

    Parameters
    ----------
    module_name : str
        Dotted name used for the file stem, e.g. "rna_nussinov_fold".
    log_dir : Optional[Path], optional
        Target directory. Defaults to `DEFAULT_LOG_DIR` (`var/log`).
    include_timestamp : bool, optional
        Append `_YYYYmmdd_HHMMSS` to the stem, by default True.

    Returns
    -------
    Path
        `<log_dir>/<module_name with dots as underscores>[_timestamp].log`.
    """
    log_dir = DEFAULT_LOG_DIR if log_dir is None else log_dir
    log_dir.mkdir(parents=True, exist_ok=True)

    stem = module_name.replace(".", "_")
    if include_timestamp:
        stem = f"{stem}_{datetime.now().strftime('%Y%m%d_%H%M%S')}"
    return log_dir / f"{stem}.log"


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configures and returns a logger with a console handler and an optional file handler.

    Existing handlers are closed and removed first, so repeated setup does not
    duplicate messages.

    Parameters
    ----------
    name : str
        The logger name, typically a module `__name__`.
    level : int, optional
        Level of the logger, and of each handler without an override.
    log_file : Optional[str], optional
        Explicit log file path. Takes precedence over `enable_file_logging`.
    log_dir : Optional[Path], optional
        Directory for an automatically named, timestamped log file.
    enable_file_logging : bool, optional
        Create an automatic log file when `log_file` is not given. By default True.
    console_level : Optional[int], optional
        Console handler level. Pass `SILENT` to keep the console quiet.
    file_level : Optional[int], optional
        File handler level.
    stream : Optional[TextIO], optional
        Console stream. Resolved to the current `sys.stdout` when None.

    Returns
    -------
    logging.Logger
        The configured logger.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    close_handlers([name])

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout if stream is None else stream)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
    else:
        return logger

    file_handler = logging.FileHandler(log_path, mode='a')
    file_handler.setFormatter(formatter)
    file_handler.setLevel(file_level if file_level is not None else level)
    logger.addHandler(file_handler)
    logger.debug(f"Logging to file: {log_path}")

    return logger


def setup_package_loggers(
    level: int,
    log_file: Optional[str] = None,
    enable_file_logging: bool = False,
    console_level: Optional[int] = None,
    stream: Optional[TextIO] = None,
    names: Iterable[str] = PACKAGE_LOGGERS,
) -> List[logging.Logger]:
    """
    Configures every folding-pipeline logger to share one console stream and one log file.

    When file logging is enabled without an explicit `log_file`, a single
    timestamped `var/log/rna_nussinov_fold_<timestamp>.log` is created for
    the whole run.

    Returns
    -------
    List[logging.Logger]
        The configured loggers, in the order of `names`.
    """
    if log_file is None and enable_file_logging:
        log_file = str(get_log_file_path("rna_nussinov_fold"))

    return [
        setup_logger(
            name,
            level=level,
            log_file=log_file,
            enable_file_logging=False,
            console_level=console_level,
            stream=stream,
        )
        for name in names
    ]


def close_handlers(names: Iterable[str] = PACKAGE_LOGGERS) -> None:
    """Closes and detaches all handlers of the named loggers."""
    for name in names:
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
            logger.removeHandler(handler)
