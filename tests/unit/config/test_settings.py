"""Unit tests for AppSettings and the settings loaders."""

from __future__ import annotations

import pytest

from tabex.config.settings import (
    AppSettings,
    DotenvSettingsLoader,
    EnvSettingsLoader,
    InvalidSettingValueError,
)


class TestAppSettingsDefaults:
    def test_defaults(self) -> None:
        s = AppSettings()
        assert s.port == 3000
        assert s.max_file_size_bytes == 100 * 1024 * 1024
        assert s.chunk_size == 1000
        assert s.stream_high_water_chunks == 16
        assert s.export_rate_limit == 100
        assert s.import_rate_limit == 50
        assert s.image_width == 800
        assert s.report_page_size == "A4"

    def test_is_development(self) -> None:
        assert AppSettings(environment="Development").is_development
        assert not AppSettings(environment="production").is_development

    def test_env_key_has_no_prefix(self) -> None:
        assert AppSettings.env_key("max_file_size_bytes") == "MAX_FILE_SIZE_BYTES"

    def test_no_required_fields(self) -> None:
        assert AppSettings.required_fields() == []


class TestAppSettingsValidation:
    @pytest.mark.parametrize(
        "overrides",
        [
            {"chunk_size": 0},
            {"max_concurrent_jobs": -1},
            {"max_queued_jobs": -1},
            {"request_timeout_seconds": 0},
            {"csv_delimiter": ";;"},
            {"image_background": "white"},
            {"image_quality": 1.5},
            {"image_width": 50},
            {"report_page_size": "A5"},
            {"report_margin": 101},
        ],
    )
    def test_rejects_invalid_values(self, overrides: dict[str, object]) -> None:
        with pytest.raises(InvalidSettingValueError):
            AppSettings(**overrides)  # type: ignore[arg-type]

    def test_error_names_the_setting(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            AppSettings(chunk_size=0)
        assert exc_info.value.setting_name == "chunk_size"


class TestEnvSettingsLoader:
    def test_coerces_types(self) -> None:
        env = {
            "PORT": "8080",
            "IMAGE_QUALITY": "0.5",
            "REQUEST_TIMEOUT_SECONDS": "12.5",
            "ENVIRONMENT": "production",
        }
        s = EnvSettingsLoader(env).load(AppSettings)
        assert s.port == 8080
        assert s.image_quality == 0.5
        assert s.request_timeout_seconds == 12.5
        assert s.environment == "production"

    def test_missing_values_keep_defaults(self) -> None:
        s = EnvSettingsLoader({}).load(AppSettings)
        assert s.port == 3000

    def test_uncoercible_value(self) -> None:
        with pytest.raises(InvalidSettingValueError) as exc_info:
            EnvSettingsLoader({"PORT": "eighty"}).load(AppSettings)
        assert exc_info.value.setting_name == "PORT"

    def test_out_of_range_value(self) -> None:
        with pytest.raises(InvalidSettingValueError):
            EnvSettingsLoader({"CHUNK_SIZE": "0"}).load(AppSettings)


class TestDotenvSettingsLoader:
    def test_reads_env_file(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("CSV_DELIMITER=;\nMAX_CONCURRENT_JOBS=3\n")
        # registered with monkeypatch so values loaded from the file are undone
        for key in ("CSV_DELIMITER", "MAX_CONCURRENT_JOBS"):
            monkeypatch.setenv(key, "placeholder")
            monkeypatch.delenv(key)
        s = DotenvSettingsLoader(str(env_file)).load(AppSettings)
        assert s.csv_delimiter == ";"
        assert s.max_concurrent_jobs == 3

    def test_environment_wins_without_override(self, tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("REPORT_MARGIN=10\n")
        monkeypatch.setenv("REPORT_MARGIN", "20")
        s = DotenvSettingsLoader(str(env_file)).load(AppSettings)
        assert s.report_margin == 20

    def test_missing_file_is_ignored(self, tmp_path) -> None:
        s = DotenvSettingsLoader(str(tmp_path / "absent.env")).load(AppSettings)
        assert isinstance(s, AppSettings)
