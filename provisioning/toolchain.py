# provisioning/toolchain.py
# -*- coding: utf-8 -*-
"""
Reads the pinned toolchain version and installs that toolchain.

The installer script is downloaded over HTTPS only, with TLS 1.2 as the
minimum protocol version, and then piped into a shell with the pinned
version and the non-interactive flag.
"""

import logging
import ssl
import subprocess
from pathlib import Path
from typing import List, Optional, Union
from urllib.parse import urlparse

import requests
from requests.adapters import HTTPAdapter

from common.command_utils import get_symbols, log_message, run_command
from common.errors import (
    COMMAND_NOT_FOUND_RC,
    ConfigReadError,
    ToolchainInstallError,
)
from devenv.config_models import AppSettings

module_logger = logging.getLogger(__name__)


class TLSv12Adapter(HTTPAdapter):
    """HTTPAdapter whose connections refuse anything older than TLS 1.2."""

    @staticmethod
    def _tls12_context() -> ssl.SSLContext:
        context = ssl.create_default_context()
        context.minimum_version = ssl.TLSVersion.TLSv1_2
        return context

    def init_poolmanager(self, *args, **kwargs):
        kwargs["ssl_context"] = self._tls12_context()
        return super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        # Tunnelled connections get their own pool manager per proxy.
        proxy_kwargs["ssl_context"] = self._tls12_context()
        return super().proxy_manager_for(proxy, **proxy_kwargs)


def create_https_session() -> requests.Session:
    """Returns a session that can only talk HTTPS with TLS >= 1.2."""
    session = requests.Session()
    # Only https:// has an adapter.
    session.adapters.clear()
    session.mount("https://", TLSv12Adapter())
    return session


def read_toolchain_version(
    toolchain_file: Union[str, Path],
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Reads the version identifier from the version-pin file.

    Surrounding spaces, tabs and line endings are stripped. What remains
    must be a single token: a version identifier never contains whitespace.

    Raises:
        ConfigReadError: If the file is missing or unreadable, holds no
            version, or holds whitespace inside the version.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    path = Path(toolchain_file)

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigReadError(
            f"Toolchain version file '{path}' does not exist."
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigReadError(
            f"Could not read toolchain version file '{path}': {e}"
        ) from e

    version = content.strip(" \t\r\n")
    if not version:
        raise ConfigReadError(f"Toolchain version file '{path}' is empty.")
    if any(char.isspace() for char in version):
        raise ConfigReadError(
            f"Toolchain version file '{path}' must hold a single version, got {version!r}."
        )

    log_message(
        f"{symbols.get('info', 'ℹ️')} Pinned toolchain version: {version}",
        "info",
        logger_to_use,
        app_settings,
    )
    return version


def _require_https(url: str) -> None:
    scheme = urlparse(url).scheme
    if scheme != "https":
        raise ToolchainInstallError(
            f"Refusing to fetch installer over '{scheme or 'no scheme'}': {url}"
        )


def download_installer(
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    session: Optional[requests.Session] = None,
) -> str:
    """
    Downloads the toolchain installer script and returns its text.

    Every URL in the redirect chain must be ``https``.

    Raises:
        ToolchainInstallError: On a non-https URL, HTTP error or network failure.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    url = app_settings.installer_url
    _require_https(url)

    log_message(
        f"{symbols.get('gear', '⚙️')} Downloading toolchain installer from {url}...",
        "info",
        logger_to_use,
        app_settings,
    )
    own_session = session is None
    http = create_https_session() if own_session else session
    try:
        response = http.get(url, timeout=app_settings.download_timeout)
        response.raise_for_status()
        for hop in [r.url for r in response.history] + [response.url]:
            _require_https(hop)
        return response.text
    except requests.exceptions.RequestException as e:
        raise ToolchainInstallError(
            f"Failed to download toolchain installer from {url}: {e}"
        ) from e
    finally:
        if own_session:
            http.close()


def build_installer_command(
    version: str, app_settings: AppSettings
) -> List[str]:
    """Returns the shell command that runs the piped installer script."""
    return [
        app_settings.installer_shell,
        "-s",
        "--",
        "-y",
        "--default-toolchain",
        version,
    ]


def install_toolchain(
    version: str,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    session: Optional[requests.Session] = None,
) -> None:
    """
    Downloads the installer and runs it for the given toolchain version.

    Raises:
        ToolchainInstallError: If the download fails or the installer exits
            non-zero. ``returncode`` carries the installer's exit code.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    script = download_installer(app_settings, logger_to_use, session=session)

    log_message(
        f"{symbols.get('step', '➡️')} Installing toolchain {version}...",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        run_command(
            build_installer_command(version, app_settings),
            app_settings,
            cmd_input=script,
            current_logger=logger_to_use,
        )
    except subprocess.CalledProcessError as e:
        raise ToolchainInstallError(
            f"Toolchain installer exited with code {e.returncode}.",
            returncode=e.returncode,
        ) from e
    except FileNotFoundError as e:
        raise ToolchainInstallError(
            f"Installer shell '{app_settings.installer_shell}' not found.",
            returncode=COMMAND_NOT_FOUND_RC,
        ) from e

    log_message(
        f"{symbols.get('success', '✅')} Toolchain {version} installed.",
        "success",
        logger_to_use,
        app_settings,
    )
