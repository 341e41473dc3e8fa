from __future__ import annotations

from logics.config import Settings, get_settings
from logics.data_model import DEFAULT_EXCHANGE_RATE, CalculationMode


def test_settings_defaults(monkeypatch):
    for name in ("EXCHANGE_RATE", "TOTAL_TARGET", "MODE", "PERCENT_TOLERANCE", "TOAST_MS", "LOG_LEVEL"):
        monkeypatch.delenv(f"SALES_TARGET_{name}", raising=False)

    settings = Settings()

    assert settings.exchange_rate == DEFAULT_EXCHANGE_RATE
    assert settings.total_target == 100_000_000_000
    assert settings.mode == CalculationMode.TOP_DOWN
    assert settings.percent_tolerance == 0.1
    assert settings.toast_ms == 3000
    assert settings.log_level == "INFO"


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("SALES_TARGET_EXCHANGE_RATE", "60000")
    monkeypatch.setenv("SALES_TARGET_MODE", "Bottom-Up")
    monkeypatch.setenv("SALES_TARGET_TOAST_MS", "1500")
    monkeypatch.setenv("SALES_TARGET_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.exchange_rate == 60_000
    assert settings.mode == CalculationMode.BOTTOM_UP
    assert settings.toast_ms == 1500
    assert settings.log_level == "DEBUG"


def test_settings_fall_back_on_invalid_values(monkeypatch):
    monkeypatch.setenv("SALES_TARGET_EXCHANGE_RATE", "lots")
    monkeypatch.setenv("SALES_TARGET_MODE", "sideways")

    settings = Settings()

    assert settings.exchange_rate == DEFAULT_EXCHANGE_RATE
    assert settings.mode == CalculationMode.TOP_DOWN


def test_explicit_arguments_win_over_environment(monkeypatch):
    monkeypatch.setenv("SALES_TARGET_EXCHANGE_RATE", "60000")

    assert Settings(exchange_rate=70_000).exchange_rate == 70_000


def test_get_settings_is_cached():
    get_settings.cache_clear()

    assert get_settings() is get_settings()


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("SALES_TARGET_LOG_LEVEL", "verbose")

    assert Settings().log_level == "INFO"
    assert Settings(log_level="warning").log_level == "WARNING"


def test_explicit_zero_toast_duration_is_kept(monkeypatch):
    monkeypatch.setenv("SALES_TARGET_TOAST_MS", "1500")

    assert Settings(toast_ms=0).toast_ms == 0
