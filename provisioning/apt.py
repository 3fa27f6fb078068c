# provisioning/apt.py
# -*- coding: utf-8 -*-
"""
Refreshes the apt package index and installs the native packages needed
by the downstream tooling.
"""

import logging
import subprocess
from typing import List, Optional

from common.command_utils import (
    command_exists,
    get_symbols,
    log_message,
    run_elevated_command,
)
from common.errors import (
    COMMAND_NOT_FOUND_RC,
    PackageIndexError,
    PackageInstallError,
)
from devenv.config_models import AppSettings

module_logger = logging.getLogger(__name__)

APT_COMMAND = "apt"


def refresh_package_index(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Runs ``apt update``.

    Raises:
        PackageIndexError: If apt is missing or exits non-zero.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if not command_exists(APT_COMMAND):
        raise PackageIndexError(
            f"'{APT_COMMAND}' command not found. Cannot refresh the system package index.",
            returncode=COMMAND_NOT_FOUND_RC,
        )

    log_message(
        f"{symbols.get('gear', '⚙️')} Updating apt package list (may require password for sudo)...",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        run_elevated_command(
            [APT_COMMAND, "update"], app_settings, current_logger=logger_to_use
        )
    except subprocess.CalledProcessError as e:
        raise PackageIndexError(
            f"'{APT_COMMAND} update' exited with code {e.returncode}.",
            returncode=e.returncode,
        ) from e
    except FileNotFoundError as e:
        raise PackageIndexError(
            f"Could not run '{APT_COMMAND} update': {e}",
            returncode=COMMAND_NOT_FOUND_RC,
        ) from e


def install_system_packages(
    packages: List[str],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Runs ``apt install -y`` for all packages in a single invocation.

    Raises:
        PackageInstallError: If apt exits non-zero.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    log_message(
        f"{symbols.get('package', '📦')} Installing: {', '.join(packages)} (may require password for sudo)...",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        run_elevated_command(
            [APT_COMMAND, "install", "-y"] + list(packages),
            app_settings,
            current_logger=logger_to_use,
        )
    except subprocess.CalledProcessError as e:
        raise PackageInstallError(
            f"'{APT_COMMAND} install' exited with code {e.returncode} for: {', '.join(packages)}.",
            returncode=e.returncode,
        ) from e
    except FileNotFoundError as e:
        raise PackageInstallError(
            f"Could not run '{APT_COMMAND} install': {e}",
            returncode=COMMAND_NOT_FOUND_RC,
        ) from e

    log_message(
        f"{symbols.get('success', '✅')} Successfully installed: {', '.join(packages)}.",
        "success",
        logger_to_use,
        app_settings,
    )
