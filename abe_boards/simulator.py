"""
ABE Boards - Simulated Hardware (Development Without Boards)
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Simulated ADC-DAC Pi SPI bus and DS1307 I2C device

Use these in place of SpidevTransport / SMBusTransport to exercise the
drivers without a Raspberry Pi:

    bus = SimulatedADCDACBus()
    bus.set_input(1, 0, 2048)
    board = ADCDAC(transport=bus)
    board.read_adc_raw(1, 0)   # -> 2048
"""

import logging
from typing import Dict, List, Optional, Tuple

from .config import settings
from .exceptions import TransportError
from .models.board import DacGain, DacOutput
from . import registers as reg

logger = logging.getLogger(__name__)

# select byte -> (channel, mode)
_ADC_SELECT_DECODE = {select: key for key, select in reg.ADC_SELECT.items()}


class SimulatedADCDACBus:
    """
    SPI bus with an MCP3202 on the ADC chip select and an MCP4822 on the
    DAC chip select. Every exchange is appended to `transactions` as
    (line, divider, tx, rx).
    """

    def __init__(self):
        self.inputs: Dict[Tuple[int, int], int] = {key: 0 for key in reg.ADC_SELECT}
        self.outputs: Dict[int, DacOutput] = {}
        self.transactions: List[Tuple[int, Optional[int], List[int], List[int]]] = []
        self.line: Optional[int] = None
        self.divider: Optional[int] = None
        self.closed = False

    def set_input(self, channel: int, mode: int, raw: int):
        """Set the 12-bit conversion result returned for (channel, mode)"""
        if (channel, mode) not in self.inputs:
            raise ValueError(f"Unknown ADC input ({channel}, {mode})")
        if not 0 <= raw <= reg.ADC_MAX_RAW:
            raise ValueError(f"Raw value out of range: {raw}")
        self.inputs[(channel, mode)] = raw

    def select_chip(self, line: int) -> None:
        self._check_open()
        self.line = line

    def set_clock_divider(self, divider: int) -> None:
        self._check_open()
        self.divider = divider

    def exchange(self, tx: List[int]) -> List[int]:
        self._check_open()
        tx = list(tx)
        if self.line == settings.ADC_CHIP_SELECT:
            rx = self._adc_exchange(tx)
        elif self.line == settings.DAC_CHIP_SELECT:
            rx = self._dac_exchange(tx)
        else:
            # Nothing on this line: MISO floats high
            rx = [0xFF] * len(tx)
        self.transactions.append((self.line, self.divider, tx, rx))
        return rx

    def close(self) -> None:
        self.closed = True

    def _adc_exchange(self, tx: List[int]) -> List[int]:
        if len(tx) != reg.ADC_FRAME_LENGTH or tx[0] != reg.ADC_START:
            return [0] * len(tx)
        key = _ADC_SELECT_DECODE.get(tx[1] & 0xC0)
        raw = self.inputs[key] if key else 0
        # MCP3202 leaves the null bit and stale high bits in the upper nibble
        return [0x00, 0xE0 | (raw >> 8), raw & 0xFF]

    def _dac_exchange(self, tx: List[int]) -> List[int]:
        if len(tx) == reg.DAC_FRAME_LENGTH:
            high, low = tx
            channel = ((high >> reg.DAC_CHANNEL_BIT) & 0x01) + 1
            gain = DacGain.ONE if high & (1 << reg.DAC_GAIN_BIT) else DacGain.TWO
            self.outputs[channel] = DacOutput(
                channel=channel,
                value=((high & 0x0F) << 8) | low,
                gain=gain,
                active=bool(high & (1 << reg.DAC_ACTIVE_BIT)),
            )
            logger.debug(f"Simulated DAC: {self.outputs[channel]}")
        return [0] * len(tx)

    def _check_open(self):
        if self.closed:
            raise TransportError("Simulated SPI bus is closed")


class SimulatedDS1307:
    """
    DS1307 register file on an I2C bus.

    A write sets the register pointer from its first byte and stores the
    rest with auto-increment; a read returns bytes from the pointer onward.
    The pointer wraps from 0x3F to 0x00. Writes are recorded in `writes`
    and read lengths in `reads`.
    """

    SIZE = reg.MEMORY_END + 1

    def __init__(self, address: Optional[int] = None):
        self.address = settings.RTC_ADDRESS if address is None else address
        self.registers = bytearray(self.SIZE)
        self.pointer = 0
        self.selected: Optional[int] = None
        self.writes: List[bytes] = []
        self.reads: List[int] = []
        self.closed = False

    def set_slave_address(self, address: int) -> None:
        self._check_open()
        self.selected = address

    def write(self, data: bytes) -> None:
        self._check_selected()
        data = bytes(data)
        self.writes.append(data)
        if not data:
            return
        self.pointer = data[0] % self.SIZE
        for value in data[1:]:
            self.registers[self.pointer] = value
            self.pointer = (self.pointer + 1) % self.SIZE

    def read(self, length: int) -> bytes:
        self._check_selected()
        self.reads.append(length)
        out = bytearray()
        for _ in range(length):
            out.append(self.registers[self.pointer])
            self.pointer = (self.pointer + 1) % self.SIZE
        return bytes(out)

    def close(self) -> None:
        self.closed = True

    def _check_open(self):
        if self.closed:
            raise TransportError("Simulated I2C bus is closed")

    def _check_selected(self):
        self._check_open()
        if self.selected != self.address:
            # No ACK from any device at this address
            raise TransportError(f"No device at I2C address {self.selected!r}")
