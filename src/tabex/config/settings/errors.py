"""Config settings – loading and validation errors."""
from __future__ import annotations

from tabex.kernel.errors import BaseError


class ConfigError(BaseError):
    """Configuration could not be loaded or constructed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A setting without default is absent from every source."""
    default_code = "missing_required_setting"

    def __init__(self, env_key: str) -> None:
        super().__init__(f"Required setting '{env_key}' is missing")
        self.env_key = env_key


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be coerced or is out of range."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(f"Setting '{setting_name}' has invalid value {value!r}: {reason}")
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
