#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Logging setup for the bootstrapper.

Every record gets a symbol for its level and, when configured, the
``log_prefix`` from the settings in front of it.
"""

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from devenv.config_models import SYMBOLS_DEFAULT

module_logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(symbol)s %(name)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LEVEL_SYMBOL_KEYS = {
    logging.DEBUG: ("debug", "🐛"),
    logging.INFO: ("info", "ℹ️"),
    logging.WARNING: ("warning", "⚠️"),
    logging.ERROR: ("error", "❌"),
    logging.CRITICAL: ("critical", "🔥"),
}


class SymbolFormatter(logging.Formatter):
    """Sets ``record.symbol`` from the level before formatting."""

    def __init__(self, fmt=None, datefmt=None, symbols=None):
        super().__init__(fmt, datefmt)
        self.symbols: Dict[str, str] = symbols or SYMBOLS_DEFAULT

    def format(self, record):
        key, fallback = LEVEL_SYMBOL_KEYS.get(record.levelno, (None, ""))
        record.symbol = self.symbols.get(key, fallback) if key else fallback
        return super().format(record)


def build_log_format(log_prefix: Optional[str] = None) -> str:
    """Returns LOG_FORMAT, with ``log_prefix`` and a space in front if given."""
    if log_prefix and log_prefix.strip():
        return f"{log_prefix.strip()} {LOG_FORMAT}"
    return LOG_FORMAT


def setup_logging(
    log_level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_prefix: Optional[str] = None,
    symbols: Optional[Dict[str, str]] = None,
) -> None:
    """
    Configures the root logger to write to stdout and, optionally, a file.

    A log file that cannot be opened is reported on stderr and skipped.
    Existing root handlers are replaced, so calling this again (once the
    settings are known) does not duplicate output.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        try:
            log_file_path = Path(log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file_path, mode="a"))
        except OSError as e:
            print(
                f"Warning: Could not create file handler for log file {log_file}: {e}",
                file=sys.stderr,
            )

    formatter = SymbolFormatter(
        fmt=build_log_format(log_prefix),
        datefmt=LOG_DATE_FORMAT,
        symbols=symbols,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    module_logger.debug(
        f"Logging configured. Level: {logging.getLevelName(log_level)}."
    )
