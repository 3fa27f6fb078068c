"""
Configuration for the development-environment bootstrapper.
"""

from devenv.config_loader import load_app_settings
from devenv.config_models import AppSettings

__all__ = ["AppSettings", "load_app_settings"]
