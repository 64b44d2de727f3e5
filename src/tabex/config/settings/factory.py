"""Config settings – SettingsFactory."""
from __future__ import annotations

import dataclasses
from typing import Any, Sequence, TypeVar

from tabex.config.settings.app import AppSettings
from tabex.config.settings.base import Settings
from tabex.config.settings.errors import ConfigError, MissingRequiredSettingError
from tabex.config.settings.loaders import DotenvSettingsLoader, SettingsLoader

T = TypeVar("T", bound=Settings)


class SettingsFactory:
    """Merge outputs from multiple loaders, apply overrides, and construct
    a settings dataclass in one step.

    Loaders are applied in order; later loaders override earlier ones for
    overlapping fields.  *overrides* (if provided) take the highest priority.
    """

    @staticmethod
    def create(
        settings_cls: type[T],
        loaders: Sequence[SettingsLoader] | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> T:
        """
        Raises
        ------
        MissingRequiredSettingError
            When a required field is absent after all sources are merged.
        InvalidSettingValueError
            When a loader or the final construction rejects a value.
        ConfigError
            On any other construction failure.
        """
        merged: dict[str, Any] = {}

        for loader in loaders or []:
            instance = loader.load(settings_cls)
            for field in dataclasses.fields(instance):  # type: ignore[arg-type]
                merged[field.name] = getattr(instance, field.name)

        if overrides:
            unknown = set(overrides) - {f.name for f in dataclasses.fields(settings_cls)}  # type: ignore[arg-type]
            if unknown:
                raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")
            merged.update(overrides)

        for name in settings_cls.required_fields():
            if name not in merged:
                raise MissingRequiredSettingError(settings_cls.env_key(name))

        try:
            return settings_cls(**merged)
        except ConfigError:
            raise
        except Exception as exc:
            raise ConfigError(f"Failed to construct {settings_cls.__name__}: {exc}") from exc


def load_settings(env_file: str = ".env", **overrides: Any) -> AppSettings:
    """Load :class:`AppSettings` from ``.env`` + environment, then *overrides*."""
    return SettingsFactory.create(
        AppSettings,
        loaders=[DotenvSettingsLoader(env_file)],
        overrides=overrides or None,
    )


__all__ = ["SettingsFactory", "load_settings"]
