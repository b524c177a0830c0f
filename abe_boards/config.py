"""
ABE Boards - System Configuration
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial configuration module (SPI/I2C buses, ADC-DAC Pi
                      clock dividers and reference, RTC Pi address and century)
"""

import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Board-wide configuration, overridable with ABE_* environment variables"""

    model_config = SettingsConfigDict(
        env_prefix="ABE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    APP_NAME: str = "ABE Boards"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_FILE: str = ""  # Empty = console only

    # SPI Configuration (ADC-DAC Pi)
    SPI_BUS: int = 0  # /dev/spidev0.*
    SPI_MODE: int = 0  # CPOL=0, CPHA=0
    SPI_CORE_CLOCK_HZ: int = 250_000_000  # BCM2835 core clock, divided per device
    ADC_CHIP_SELECT: int = 0  # MCP3202 on CE0
    DAC_CHIP_SELECT: int = 1  # MCP4822 on CE1
    ADC_CLOCK_DIVIDER: int = 140  # ~1.8MHz, slow enough for 12-bit conversion
    DAC_CLOCK_DIVIDER: int = 14  # ~17.9MHz
    ADC_REF_VOLTAGE: float = 3.3  # Measured on the Pi's 3.3V rail

    # I2C Configuration (RTC Pi)
    I2C_BUS: int = 1  # /dev/i2c-1
    RTC_ADDRESS: int = 0x68  # DS1307 fixed address
    RTC_DEFAULT_CENTURY: int = 2000  # DS1307 only stores a 2-digit year
    RTC_DEFAULT_CONTROL: int = 0x03  # Output disabled, 32.768KHz selected


# Singleton instance
settings = Settings()


def get_spi_speed_hz(divider: int, core_clock_hz: Optional[int] = None) -> int:
    """Convert a BCM2835-style clock divider into an SPI max_speed_hz value"""
    if divider < 1:
        raise ValueError(f"Invalid clock divider: {divider}")
    if core_clock_hz is None:
        core_clock_hz = settings.SPI_CORE_CLOCK_HZ
    return core_clock_hz // divider


def setup_logging(debug: Optional[bool] = None, log_file: Optional[str] = None):
    """Configure root logging for scripts using the drivers"""
    if debug is None:
        debug = settings.DEBUG
    if log_file is None:
        log_file = settings.LOG_FILE

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True,
    )


if __name__ == "__main__":
    print(f"{settings.APP_NAME} Configuration v{settings.APP_VERSION}")
    print(f"SPI Bus: {settings.SPI_BUS} (mode {settings.SPI_MODE})")
    print(f"  ADC: CE{settings.ADC_CHIP_SELECT}  "
          f"divider {settings.ADC_CLOCK_DIVIDER} -> "
          f"{get_spi_speed_hz(settings.ADC_CLOCK_DIVIDER)} Hz  "
          f"Vref {settings.ADC_REF_VOLTAGE}V")
    print(f"  DAC: CE{settings.DAC_CHIP_SELECT}  "
          f"divider {settings.DAC_CLOCK_DIVIDER} -> "
          f"{get_spi_speed_hz(settings.DAC_CLOCK_DIVIDER)} Hz")
    print(f"I2C Bus: {settings.I2C_BUS}")
    print(f"  RTC: 0x{settings.RTC_ADDRESS:02X}  "
          f"century {settings.RTC_DEFAULT_CENTURY}  "
          f"control 0x{settings.RTC_DEFAULT_CONTROL:02X}")
