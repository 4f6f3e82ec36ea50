# File: config/logger_config.py
# Centralized logging configuration for the hash table visualizer.
# Every module that needs file or console output asks this function for a named logger,
# so log format, rotation and the logs directory are defined in one place.

import logging  # Provides logging functionality
import os  # For handling file system paths and directories
from logging.handlers import RotatingFileHandler  # For managing rotating log files
from typing import Optional  # For optional type hinting

# Formatter shared by every handler created here
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def default_log_dir() -> str:
    """
    Returns the directory where log files are written.

    The `LOG_DIR` environment variable wins; otherwise logs live in `<project root>/logs`.
    """
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return os.getenv("LOG_DIR", os.path.join(project_root, "logs"))


def configure_logger(
    name: Optional[str] = None,  # The name of the logger; None defaults to the root logger
    log_dir: Optional[str] = None,  # Directory for log files; None resolves via default_log_dir()
    log_file: str = "visualizer.log",  # Name of the log file
    level: int = logging.INFO,  # Logging level (e.g., DEBUG, INFO, WARNING, ERROR)
    max_bytes: int = 10 * 1024 * 1024,  # Maximum size of a log file before rotation (default: 10 MB)
    backup_count: int = 5,  # Number of backup files to keep during log rotation
    output: str = "both",  # Where to output logs: "file", "console", or "both"
) -> logging.Logger:
    """
    Configures and returns a logger instance.

    Args:
        name (Optional[str]): Name of the logger. If None, the root logger is used.
        log_dir (Optional[str]): Directory to store log files.
        log_file (str): Name of the log file.
        level (int): Logging level (e.g., logging.INFO, logging.DEBUG).
        max_bytes (int): Maximum size of the log file before rotation.
        backup_count (int): Number of backup files to keep during rotation.
        output (str): Where to send logs: "file", "console", or "both".

    Returns:
        logging.Logger: Configured logger instance.

    Raises:
        ValueError: If `output` is not one of "file", "console" or "both".
        RuntimeError: If the log directory or a handler cannot be created.
    """
    if output not in {"file", "console", "both"}:
        raise ValueError(f"Unsupported log output '{output}'. Use 'file', 'console' or 'both'.")

    try:
        # Resolve and create the logs directory when file output is requested
        log_dir = log_dir or default_log_dir()
        if output in {"file", "both"}:
            os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.join(log_dir, log_file)

        # Create or retrieve the logger instance with the specified name
        logger = logging.getLogger(name)
        logger.setLevel(level)

        # Check if the logger already has handlers to prevent duplicate logs
        if not logger.handlers:
            formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

            # If output includes file logging, configure a rotating file handler
            if output in {"file", "both"}:
                try:
                    file_handler = RotatingFileHandler(
                        log_path, maxBytes=max_bytes, backupCount=backup_count
                    )
                    file_handler.setLevel(level)
                    file_handler.setFormatter(formatter)
                    logger.addHandler(file_handler)
                except OSError as e:
                    raise RuntimeError(
                        f"Failed to configure file handler for logger: {e}"
                    ) from e

            # If output includes console logging, configure a stream handler
            if output in {"console", "both"}:
                console_handler = logging.StreamHandler()
                console_handler.setLevel(level)
                console_handler.setFormatter(formatter)
                logger.addHandler(console_handler)

        return logger

    except OSError as e:  # Handle issues with creating log directories or files
        raise RuntimeError(
            f"Failed to create or access log directory: {e}"
        ) from e
