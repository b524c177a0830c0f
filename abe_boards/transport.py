"""
ABE Boards - Bus Transports
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial SPI (spidev) and I2C (smbus2) transports

The drivers only depend on the SpiTransport / I2CTransport protocols below.
SpidevTransport and SMBusTransport are the Raspberry Pi implementations;
abe_boards.simulator provides hardware-free ones.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

from smbus2 import SMBus, i2c_msg

from .config import settings, get_spi_speed_hz
from .exceptions import TransportError

logger = logging.getLogger(__name__)


@runtime_checkable
class SpiTransport(Protocol):
    """Full-duplex SPI bus with chip-select and clock divider control"""

    def select_chip(self, line: int) -> None:
        ...

    def set_clock_divider(self, divider: int) -> None:
        ...

    def exchange(self, tx: List[int]) -> List[int]:
        """Clock out tx and return the same number of received bytes"""
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class I2CTransport(Protocol):
    """Addressed I2C bus with raw write and read"""

    def set_slave_address(self, address: int) -> None:
        ...

    def write(self, data: bytes) -> None:
        ...

    def read(self, length: int) -> bytes:
        ...

    def close(self) -> None:
        ...


def _load_spidev():
    try:
        import spidev
    except ImportError as e:
        raise ImportError(
            "spidev library is not installed. Install with: pip install spidev"
        ) from e
    return spidev.SpiDev


class SpidevTransport:
    """
    SPI transport over /dev/spidev<bus>.<line>

    One SpiDev handle is opened per chip-select line the first time the
    line is selected, so the ADC (CE0) and DAC (CE1) keep independent
    speed settings. Chip select is active low and SPI mode 0.
    """

    def __init__(self, bus: Optional[int] = None, mode: Optional[int] = None,
                 core_clock_hz: Optional[int] = None,
                 spi_factory: Optional[Callable[[], Any]] = None):
        self.bus = settings.SPI_BUS if bus is None else bus
        self.mode = settings.SPI_MODE if mode is None else mode
        self.core_clock_hz = core_clock_hz or settings.SPI_CORE_CLOCK_HZ
        self._spi_factory = spi_factory
        self._devices: Dict[int, Any] = {}
        self._line: Optional[int] = None
        self._closed = False

    def select_chip(self, line: int) -> None:
        if self._closed:
            raise TransportError(f"SPI bus {self.bus} is closed")
        if line not in self._devices:
            factory = self._spi_factory or _load_spidev()
            spi = factory()
            try:
                spi.open(self.bus, line)
                spi.mode = self.mode
                spi.cshigh = False
            except OSError as e:
                raise TransportError(f"Failed to open SPI {self.bus}.{line}: {e}") from e
            self._devices[line] = spi
            logger.info(f"Opened SPI device {self.bus}.{line}")
        self._line = line

    def set_clock_divider(self, divider: int) -> None:
        self._current().max_speed_hz = get_spi_speed_hz(divider, self.core_clock_hz)

    def exchange(self, tx: List[int]) -> List[int]:
        spi = self._current()
        try:
            rx = spi.xfer2(list(tx))
        except OSError as e:
            raise TransportError(f"SPI {self.bus}.{self._line} transfer failed: {e}") from e
        return list(rx)

    def close(self) -> None:
        """Close every opened chip-select handle"""
        if self._closed:
            return
        for line, spi in self._devices.items():
            spi.close()
            logger.info(f"Closed SPI device {self.bus}.{line}")
        self._devices.clear()
        self._line = None
        self._closed = True

    def _current(self):
        if self._line is None:
            raise TransportError(f"No chip select line selected on SPI bus {self.bus}")
        return self._devices[self._line]

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        return f"SpidevTransport(bus={self.bus}, lines={sorted(self._devices)})"


class SMBusTransport:
    """I2C transport over /dev/i2c-<bus> using combined i2c_rdwr messages"""

    def __init__(self, bus: Optional[int] = None, smbus: Optional[Any] = None):
        self.bus = settings.I2C_BUS if bus is None else bus
        self.address: Optional[int] = None
        if smbus is not None:
            self._smbus = smbus
        else:
            try:
                self._smbus = SMBus(self.bus)
            except OSError as e:
                raise TransportError(f"Failed to open I2C bus {self.bus}: {e}") from e
            logger.info(f"Opened I2C bus {self.bus}")
        self._closed = False

    def set_slave_address(self, address: int) -> None:
        self.address = address

    def write(self, data: bytes) -> None:
        msg = i2c_msg.write(self._require_address(), list(data))
        try:
            self._smbus.i2c_rdwr(msg)
        except OSError as e:
            raise TransportError(f"I2C write to 0x{self.address:02X} failed: {e}") from e

    def read(self, length: int) -> bytes:
        msg = i2c_msg.read(self._require_address(), length)
        try:
            self._smbus.i2c_rdwr(msg)
        except OSError as e:
            raise TransportError(f"I2C read from 0x{self.address:02X} failed: {e}") from e
        return bytes(list(msg))

    def close(self) -> None:
        if self._closed:
            return
        self._smbus.close()
        self._closed = True
        logger.info(f"Closed I2C bus {self.bus}")

    def _require_address(self) -> int:
        if self._closed:
            raise TransportError(f"I2C bus {self.bus} is closed")
        if self.address is None:
            raise TransportError(f"No slave address set on I2C bus {self.bus}")
        return self.address

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        address = f"0x{self.address:02X}" if self.address is not None else None
        return f"SMBusTransport(bus={self.bus}, address={address})"
