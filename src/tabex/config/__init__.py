"""Configuration – settings dataclasses and loaders."""
from tabex.config.settings import AppSettings, SettingsFactory, load_settings

__all__ = ["AppSettings", "SettingsFactory", "load_settings"]
