"""Config settings – 12-factor env-based configuration."""
from tabex.config.settings.app import AppSettings
from tabex.config.settings.base import Settings
from tabex.config.settings.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)
from tabex.config.settings.factory import SettingsFactory, load_settings
from tabex.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "AppSettings",
    "ConfigError",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
    "load_settings",
]
