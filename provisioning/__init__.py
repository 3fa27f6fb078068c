# provisioning/__init__.py
# -*- coding: utf-8 -*-
"""
Provisioning steps for the development environment.

This package reads the pinned toolchain version, installs the toolchain and
installs the native system packages, in that order, stopping at the first
failure.
"""

from provisioning.sequencer import build_bootstrap_orchestrator, run_bootstrap

__all__ = ["build_bootstrap_orchestrator", "run_bootstrap"]
