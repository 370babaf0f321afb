"""Logging configuration for pivotal_tracker."""

import logging
import sys
from pathlib import Path


def setup_logging(verbose: int = 0, log_file: Path | None = None) -> None:
    """Configure logging based on verbosity level and optional file output.

    Args:
        verbose: Verbosity level (0=off, 1=INFO, 2+=DEBUG)
        log_file: Optional path to write logs to file
    """
    if verbose == 0 and log_file is None:
        return

    level = logging.DEBUG if verbose >= 2 else logging.INFO

    logger = logging.getLogger("pivotal_tracker")
    logger.setLevel(level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console output is for results, so diagnostics go to stderr
    if verbose > 0:
        stderr_handler = logging.StreamHandler(sys.stderr)
        stderr_handler.setLevel(level)
        stderr_handler.setFormatter(formatter)
        logger.addHandler(stderr_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging configured at %s", logging.getLevelName(level))
