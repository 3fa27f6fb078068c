#!/usr/bin/env python3
"""
Entry point for the development-environment bootstrapper.

Installs the pinned Rust toolchain, refreshes the apt package index and
installs the native packages the build needs. Exits 0 when every step
succeeds, otherwise with the exit code of the first failing step.
"""

import argparse
import logging
import sys
from typing import List, Optional

from common.core_utils import setup_logging
from common.errors import BootstrapError
from devenv.config_loader import CONFIG_FILE_DEFAULT, load_app_settings
from provisioning.sequencer import run_bootstrap

logger = logging.getLogger("devenv_bootstrap")


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Args:
        args: Command-line arguments. If None, sys.argv[1:] is used.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Bootstrap the development environment: install the pinned "
        "Rust toolchain and the required system packages."
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose output"
    )
    parser.add_argument(
        "--config",
        default=CONFIG_FILE_DEFAULT,
        help=f"Path to a YAML configuration file (default: {CONFIG_FILE_DEFAULT})",
    )
    parser.add_argument(
        "--toolchain-file",
        dest="toolchain_file",
        default=None,
        help="Path to the toolchain version-pin file (default: rust-toolchain)",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write log output to this file",
    )
    return parser.parse_args(args)


def main(args: Optional[List[str]] = None) -> int:
    """
    Main entry point for the bootstrapper.

    Args:
        args: Command-line arguments. If None, sys.argv[1:] is used.

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parsed_args = parse_args(args)
    log_level = logging.DEBUG if parsed_args.verbose else logging.INFO
    setup_logging(log_level=log_level, log_file=parsed_args.log_file)

    try:
        app_settings = load_app_settings(
            parsed_args, config_file_path=parsed_args.config, current_logger=logger
        )
    except SystemExit:
        # The loader has already logged the validation errors.
        return 1
    # Re-apply with the configured prefix and symbols.
    setup_logging(
        log_level=log_level,
        log_file=parsed_args.log_file,
        log_prefix=app_settings.log_prefix,
        symbols=app_settings.symbols,
    )

    try:
        run_bootstrap(app_settings, logger)
    except BootstrapError as e:
        logger.error(f"Bootstrap failed: {e}")
        return e.returncode
    except Exception as e:
        logger.exception(f"Error: {str(e)}")
        return 1

    logger.info("Development environment bootstrap completed successfully")
    return 0


if __name__ == "__main__":
    sys.exit(main())
