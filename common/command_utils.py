# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Runs the external commands of the bootstrap steps and logs what they do.
"""

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional

from devenv.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)


def log_message(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs ``message`` at the named level.

    "success" has no logging level of its own and is logged as info.
    Unknown level names also fall back to info.
    """
    effective_logger = current_logger if current_logger else module_logger
    log_method = {
        "debug": effective_logger.debug,
        "warning": effective_logger.warning,
        "error": effective_logger.error,
        "critical": effective_logger.critical,
    }.get(level, effective_logger.info)
    log_method(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Returns the configured log symbols, or the defaults."""
    if app_settings and app_settings.symbols:
        return app_settings.symbols
    return SYMBOLS_DEFAULT


def _get_elevated_command_prefix() -> List[str]:
    return [] if os.geteuid() == 0 else ["sudo"]


def run_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
) -> subprocess.CompletedProcess:
    """
    Runs ``command`` to completion and raises if it exits non-zero.

    The child inherits this process's stdout and stderr, so whatever it
    prints reaches the invoker directly. ``cmd_input`` is written to its
    standard input.

    Raises:
        subprocess.CalledProcessError: The command exited non-zero.
        FileNotFoundError: The executable does not exist.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    command_str = subprocess.list2cmdline(command)

    log_message(
        f"{symbols.get('gear', '⚙️')} Executing: {command_str}",
        "info",
        effective_logger,
        app_settings,
    )
    try:
        return subprocess.run(command, check=True, text=True, input=cmd_input)
    except subprocess.CalledProcessError as e:
        log_message(
            f"{symbols.get('error', '❌')} Command `{command_str}` failed (rc {e.returncode}).",
            "error",
            effective_logger,
            app_settings,
        )
        raise
    except FileNotFoundError as e:
        log_message(
            f"{symbols.get('error', '❌')} Command not found: {e.filename or command[0]}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> subprocess.CompletedProcess:
    """Same as :func:`run_command`, behind ``sudo`` unless already root."""
    return run_command(
        _get_elevated_command_prefix() + list(command),
        app_settings,
        current_logger=current_logger,
    )


def command_exists(command_name: str) -> bool:
    """True if ``command_name`` resolves to an executable on PATH."""
    return shutil.which(command_name) is not None
