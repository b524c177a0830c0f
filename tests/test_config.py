"""Tests for settings and logging setup."""

import logging

import pytest

from abe_boards.config import Settings, get_spi_speed_hz, setup_logging


class TestSettings:
    """Tests for defaults and environment overrides."""

    def test_defaults(self, monkeypatch) -> None:
        for name in ("ABE_I2C_BUS", "ABE_RTC_ADDRESS", "ABE_ADC_CLOCK_DIVIDER"):
            monkeypatch.delenv(name, raising=False)
        cfg = Settings(_env_file=None)
        assert cfg.I2C_BUS == 1
        assert cfg.RTC_ADDRESS == 0x68
        assert cfg.ADC_CLOCK_DIVIDER == 140
        assert cfg.DAC_CLOCK_DIVIDER == 14
        assert cfg.RTC_DEFAULT_CONTROL == 0x03

    def test_environment_override(self, monkeypatch) -> None:
        monkeypatch.setenv("ABE_I2C_BUS", "3")
        monkeypatch.setenv("ABE_ADC_REF_VOLTAGE", "3.28")
        cfg = Settings(_env_file=None)
        assert cfg.I2C_BUS == 3
        assert cfg.ADC_REF_VOLTAGE == 3.28


class TestSpiSpeed:
    """Tests for clock divider conversion."""

    def test_divider(self) -> None:
        assert get_spi_speed_hz(140, 250_000_000) == 1_785_714
        assert get_spi_speed_hz(1, 1000) == 1000

    def test_invalid_divider(self) -> None:
        with pytest.raises(ValueError):
            get_spi_speed_hz(0)


class TestLogging:
    """Tests for root logger configuration."""

    def test_debug_level(self) -> None:
        setup_logging(debug=True, log_file="")
        assert logging.getLogger().level == logging.DEBUG

    def test_info_level_with_file(self, tmp_path) -> None:
        log_file = tmp_path / "boards.log"
        setup_logging(debug=False, log_file=str(log_file))
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert any(isinstance(h, logging.FileHandler) for h in root.handlers)
        for handler in root.handlers:
            handler.close()
        root.handlers.clear()
