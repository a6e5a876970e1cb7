from rna_nussinov_fold.utils.logging_utils import (
    DEFAULT_LOG_DIR,
    PACKAGE_LOGGERS,
    SILENT,
    close_handlers,
    get_log_file_path,
    setup_logger,
    setup_package_loggers,
)

__all__ = [
    "DEFAULT_LOG_DIR",
    "PACKAGE_LOGGERS",
    "SILENT",
    "close_handlers",
    "get_log_file_path",
    "setup_logger",
    "setup_package_loggers",
]
