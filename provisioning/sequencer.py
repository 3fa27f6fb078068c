# provisioning/sequencer.py
# -*- coding: utf-8 -*-
"""
The bootstrap sequence: read the pinned toolchain version, install the
toolchain, refresh the package index, install the system packages.

Steps run strictly in this order and the first failure stops the run.
"""

import logging
from typing import Any, Dict, Optional

from common.orchestrator import Orchestrator
from devenv.config_models import AppSettings
from provisioning.apt import install_system_packages, refresh_package_index
from provisioning.toolchain import install_toolchain, read_toolchain_version

module_logger = logging.getLogger(__name__)

TOOLCHAIN_VERSION_KEY = "toolchain_version"


def read_toolchain_version_step(
    context: Dict[str, Any], app_settings: AppSettings, **kwargs
) -> str:
    version = read_toolchain_version(
        app_settings.toolchain_file, app_settings, kwargs.get("current_logger")
    )
    context[TOOLCHAIN_VERSION_KEY] = version
    return version


def install_toolchain_step(
    context: Dict[str, Any], app_settings: AppSettings, **kwargs
) -> None:
    install_toolchain(
        context[TOOLCHAIN_VERSION_KEY],
        app_settings,
        kwargs.get("current_logger"),
        session=kwargs.get("session"),
    )


def refresh_package_index_step(
    context: Dict[str, Any], app_settings: AppSettings, **kwargs
) -> None:
    refresh_package_index(app_settings, kwargs.get("current_logger"))


def install_system_packages_step(
    context: Dict[str, Any], app_settings: AppSettings, **kwargs
) -> None:
    install_system_packages(
        app_settings.system_packages,
        app_settings,
        kwargs.get("current_logger"),
    )


BOOTSTRAP_STEPS = [
    ("Read toolchain version", read_toolchain_version_step),
    ("Install toolchain", install_toolchain_step),
    ("Refresh package index", refresh_package_index_step),
    ("Install system packages", install_system_packages_step),
]


def build_bootstrap_orchestrator(
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
    session=None,
) -> Orchestrator:
    """
    Creates an Orchestrator loaded with the bootstrap steps.

    Args:
        app_settings: The application settings.
        logger: An optional logger, handed to the orchestrator and every step.
        session: An optional requests session used for the installer download.
    """
    effective_logger = logger or module_logger
    orchestrator = Orchestrator(app_settings, effective_logger)
    for name, func in BOOTSTRAP_STEPS:
        kwargs: Dict[str, Any] = {"current_logger": effective_logger}
        if session is not None:
            kwargs["session"] = session
        orchestrator.add_task(name, func, kwargs=kwargs)
    return orchestrator


def run_bootstrap(
    app_settings: AppSettings,
    logger: Optional[logging.Logger] = None,
    session=None,
) -> Orchestrator:
    """
    Runs the full bootstrap sequence.

    Returns:
        The orchestrator after a successful run, so callers can inspect
        its context and completed tasks.

    Raises:
        BootstrapError: The error of the first failing step.
    """
    orchestrator = build_bootstrap_orchestrator(app_settings, logger, session)
    orchestrator.run()
    return orchestrator
