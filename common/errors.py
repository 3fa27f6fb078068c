# common/errors.py
# -*- coding: utf-8 -*-
"""
Exception types raised by the bootstrap steps.

Each step failure maps to one exception type. The ``returncode`` attribute
is what the command-line entry point exits with.
"""

from typing import Optional

# Shell convention for an executable that could not be found
COMMAND_NOT_FOUND_RC = 127
# A child killed by signal N exits as 128 + N
SIGNAL_EXIT_BASE = 128


def exit_code_for(returncode: Optional[int]) -> int:
    """
    Maps a child process return code to a usable, non-zero exit code.

    ``subprocess`` reports death by signal as ``-signum``; that becomes
    ``128 + signum``. A missing or zero code becomes 1.
    """
    if not returncode:
        return 1
    if returncode < 0:
        return SIGNAL_EXIT_BASE - returncode
    return returncode


class BootstrapError(Exception):
    """Base class for all bootstrap step failures."""

    def __init__(self, message: str, returncode: Optional[int] = None):
        super().__init__(message)
        self.returncode = exit_code_for(returncode)


class ConfigReadError(BootstrapError):
    """The toolchain version-pin file is missing, unreadable or malformed."""


class ToolchainInstallError(BootstrapError):
    """Downloading or running the toolchain installer failed."""


class PackageIndexError(BootstrapError):
    """Refreshing the system package index failed."""


class PackageInstallError(BootstrapError):
    """Installing the system packages failed."""
