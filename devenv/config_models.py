# devenv/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the bootstrapper,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from typing import Dict, List
from urllib.parse import urlparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
TOOLCHAIN_FILE_DEFAULT: str = "rust-toolchain"
INSTALLER_URL_DEFAULT: str = "https://sh.rustup.rs"
INSTALLER_SHELL_DEFAULT: str = "sh"
DOWNLOAD_TIMEOUT_DEFAULT: int = 60
LOG_PREFIX_DEFAULT: str = "[DEVENV]"

# hardhat-ledger builds against libudev; EDR finds OpenSSL via pkg-config
SYSTEM_PACKAGES_DEFAULT: List[str] = ["nodejs", "libudev-dev", "pkg-config"]

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅", "error": "❌", "warning": "⚠️", "info": "ℹ️",
    "step": "➡️", "gear": "⚙️", "package": "📦", "rocket": "🚀",
    "sparkles": "✨", "critical": "🔥", "debug": "🐛",
}


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(env_prefix='DEVENV_', extra='ignore')

    toolchain_file: str = Field(default=TOOLCHAIN_FILE_DEFAULT,
                                description="Path of the file holding the pinned toolchain version.")
    installer_url: str = Field(default=INSTALLER_URL_DEFAULT,
                               description="HTTPS URL of the toolchain installer script.")
    installer_shell: str = Field(default=INSTALLER_SHELL_DEFAULT,
                                 description="Shell used to run the downloaded installer script.")
    download_timeout: int = Field(default=DOWNLOAD_TIMEOUT_DEFAULT, gt=0,
                                  description="Timeout in seconds for the installer download.")
    system_packages: List[str] = Field(default_factory=lambda: list(SYSTEM_PACKAGES_DEFAULT),
                                       description="Native packages installed with apt.")
    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT,
                            description="Prefix for log messages from the bootstrapper.")

    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    @field_validator("installer_url")
    @classmethod
    def _require_https(cls, value: str) -> str:
        if urlparse(value).scheme != "https":
            raise ValueError(f"installer_url must use https, got '{value}'")
        return value

    @field_validator("system_packages")
    @classmethod
    def _require_packages(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("system_packages must list at least one package")
        return value
