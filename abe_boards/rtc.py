"""
ABE Boards - RTC Pi Driver
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial DS1307 driver (date/time, square-wave output,
                      battery-backed memory)

RTC Pi / RTC Pi Plus / RTC Pi Zero: DS1307 real-time clock on I2C address 0x68.

The DS1307 only stores a 2-digit year, so the driver keeps the century.
read_date() relies on the century set by the last set_date() call (or the
one given to the constructor); callers reading a clock set by another
process must pass the right century.

The control register is write-only from the driver's point of view: every
change is applied to the cached byte and the whole byte is written back.
"""

import logging
from datetime import datetime, timedelta
from typing import Iterable, Optional

from .config import settings
from .exceptions import InvalidArgument, TransportError
from .models.board import RtcControlStatus, SquareWaveFrequency
from . import registers as reg
from .transport import I2CTransport, SMBusTransport

logger = logging.getLogger(__name__)


def _compose_datetime(year: int, month: int, day: int,
                      hours: int, minutes: int, seconds: int) -> datetime:
    """Build a datetime, carrying month/day/time overflow into the next field"""
    year += (month - 1) // 12
    month = (month - 1) % 12 + 1
    return datetime(year, month, 1) + timedelta(days=day - 1, hours=hours,
                                                minutes=minutes, seconds=seconds)


class RTCPi:
    """
    Driver for the RTC Pi board.

    Args:
        transport: I2C transport to use. If None, an SMBusTransport is opened
            on settings.I2C_BUS. The transport is released by close().
        address: I2C address of the DS1307. Defaults to settings.RTC_ADDRESS.
        century: Century added to the 2-digit hardware year on read.
            Defaults to settings.RTC_DEFAULT_CENTURY.

    The initial configuration (output disabled, 32.768KHz) is written to the
    control register on construction.
    """

    def __init__(self, transport: Optional[I2CTransport] = None,
                 address: Optional[int] = None, century: Optional[int] = None):
        self.address = settings.RTC_ADDRESS if address is None else address
        century = settings.RTC_DEFAULT_CENTURY if century is None else century
        if (isinstance(century, bool) or not isinstance(century, int)
                or century < 0 or century % 100):
            raise InvalidArgument(f"Century must be a non-negative multiple of 100, got {century}")
        self._century = century
        self._config = settings.RTC_DEFAULT_CONTROL
        self._i2c = transport if transport is not None else SMBusTransport()
        self._closed = False

        try:
            self._write_register(reg.CONTROL, self._config)
        except TransportError:
            if transport is None:
                self._i2c.close()
            raise
        logger.info(f"RTC Pi ready at 0x{self.address:02X} "
                    f"(control 0x{self._config:02X}, century {self._century})")

    # -- Date/Time --

    def set_date(self, date: datetime):
        """
        Set the date and time on the RTC

        The month register receives date.month - 1 and read_date() does not
        add it back, so a date read after set_date() comes back one month
        earlier. Day of week is stored with Sunday = 0.
        """
        if not isinstance(date, datetime):
            raise InvalidArgument(f"Expected a datetime, got {type(date).__name__}")

        century = self._century
        if date.year >= 100:
            century = (date.year // 100) * 100

        values = [
            reg.dec_to_bcd(date.second),
            reg.dec_to_bcd(date.minute),
            reg.dec_to_bcd(date.hour),
            reg.dec_to_bcd(date.isoweekday() % 7),
            reg.dec_to_bcd(date.day),
            reg.dec_to_bcd(date.month - 1),
            reg.dec_to_bcd(date.year - century),
        ]

        for register, value in zip(reg.DATE_REGISTERS, values):
            self._write_register(register, value)
        self._century = century
        logger.debug(f"RTC date set to {date.isoformat()} (century {century})")

    def read_date(self) -> datetime:
        """Read the date and time from the RTC"""
        self._check_open()
        self._i2c.set_slave_address(self.address)
        self._i2c.write(bytes([reg.SECONDS]))
        data = self._i2c.read(len(reg.DATE_REGISTERS))
        logger.debug(f"RTC date registers [{reg.format_frame(data)}]")

        return _compose_datetime(
            year=reg.bcd_to_dec(data[reg.YEAR]) + self._century,
            month=reg.bcd_to_dec(data[reg.MONTH]),
            day=reg.bcd_to_dec(data[reg.DAY]),
            hours=reg.bcd_to_dec(data[reg.HOURS]),
            minutes=reg.bcd_to_dec(data[reg.MINUTES]),
            seconds=reg.bcd_to_dec(data[reg.SECONDS]),
        )

    # -- Square-Wave Output --

    def enable_output(self):
        """Enable the square-wave output pin"""
        config = reg.update_byte(self._config, reg.CONTROL_OUT_BIT, 1)
        config = reg.update_byte(config, reg.CONTROL_SQWE_BIT, 1)
        self._write_control(config)

    def disable_output(self):
        """Disable the square-wave output pin"""
        config = reg.update_byte(self._config, reg.CONTROL_OUT_BIT, 0)
        config = reg.update_byte(config, reg.CONTROL_SQWE_BIT, 0)
        self._write_control(config)

    def set_frequency(self, frequency: int):
        """
        Set the square-wave output frequency

        Args:
            frequency: 1 = 1Hz, 2 = 4.096KHz, 3 = 8.192KHz, 4 = 32.768KHz
        """
        if isinstance(frequency, bool) or frequency not in reg.FREQUENCY_RATE_SELECT:
            raise InvalidArgument(f"Frequency {frequency!r} out of range (must be 1-4)")
        rs1, rs0 = reg.FREQUENCY_RATE_SELECT[frequency]
        config = reg.update_byte(self._config, reg.CONTROL_RS0_BIT, rs0)
        config = reg.update_byte(config, reg.CONTROL_RS1_BIT, rs1)
        self._write_control(config)

    def get_control_status(self) -> RtcControlStatus:
        """Decode the last control byte written (no bus access)"""
        flags = reg.parse_control_flags(self._config)
        return RtcControlStatus(
            control=self._config,
            output_enabled=flags['output_enabled'],
            square_wave_enabled=flags['square_wave_enabled'],
            frequency=SquareWaveFrequency(flags['frequency']),
            frequency_hz=reg.FREQUENCY_HZ[flags['frequency']],
        )

    # -- Battery-Backed Memory --

    def write_memory(self, address: int, data: Iterable[int]):
        """
        Write to the DS1307's 56-byte battery-backed RAM

        Args:
            address: 0x08 to 0x3F
            data: bytes to write; address + len(data) - 1 must not pass 0x3F
        """
        data = list(data)
        reg.check_memory_window(address, len(data))
        if not data:
            raise InvalidArgument("No data to write")
        for value in data:
            if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= 0xFF:
                raise InvalidArgument(f"Memory value {value!r} is not a byte")

        frame = bytes([address] + data)
        self._check_open()
        self._i2c.set_slave_address(self.address)
        self._i2c.write(frame)
        logger.debug(f"RTC memory write [{reg.format_frame(frame)}]")

    def read_memory(self, address: int, length: int) -> bytes:
        """
        Read from the DS1307's 56-byte battery-backed RAM

        Args:
            address: 0x08 to 0x3F
            length: number of bytes; address + length - 1 must not pass 0x3F
        """
        if isinstance(length, bool) or not isinstance(length, int) or length < 1:
            raise InvalidArgument(f"Length {length!r} must be a positive integer")
        reg.check_memory_window(address, length)

        self._check_open()
        self._i2c.set_slave_address(self.address)
        self._i2c.write(bytes([address]))
        data = bytes(self._i2c.read(length))
        logger.debug(f"RTC memory read 0x{address:02X}: [{reg.format_frame(data)}]")
        return data

    # -- Internal --

    def _write_control(self, config: int):
        self._write_register(reg.CONTROL, config)
        self._config = config

    def _write_register(self, register: int, value: int):
        self._check_open()
        self._i2c.set_slave_address(self.address)
        self._i2c.write(bytes([register, value]))

    def _check_open(self):
        if self._closed:
            raise RuntimeError("RTC Pi driver is closed")

    # -- Lifecycle --

    def close(self):
        """Release the I2C transport. Calling again does nothing."""
        if self._closed:
            return
        self._closed = True
        self._i2c.close()
        logger.info("RTC Pi closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def century(self) -> int:
        return self._century

    @property
    def config(self) -> int:
        """Cached control register byte"""
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        return (f"RTCPi(address=0x{self.address:02X}, control=0x{self._config:02X}, "
                f"century={self._century}, closed={self._closed})")
