"""
ABE Boards - ADC-DAC Pi Driver
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial MCP3202 / MCP4822 driver

ADC-DAC Pi / ADC-DAC Pi Zero: 2-channel 12-bit ADC (MCP3202, CE0) and
2-channel 12-bit DAC (MCP4822, CE1) sharing SPI bus 0.

Each read/write builds a fresh frame and performs exactly one SPI exchange.
Arguments are validated before the bus is touched.
"""

import logging
from numbers import Real
from typing import Optional

from .config import settings
from .exceptions import InvalidArgument
from .models.board import AcquisitionMode, DacGain
from . import registers as reg
from .transport import SpiTransport, SpidevTransport

logger = logging.getLogger(__name__)


class ADCDAC:
    """
    Driver for the ADC-DAC Pi board.

    Args:
        transport: SPI transport to use. If None, a SpidevTransport is opened
            on settings.SPI_BUS. The transport is released by close().
        adc_ref_voltage: ADC reference voltage. Defaults to settings.ADC_REF_VOLTAGE.
    """

    def __init__(self, transport: Optional[SpiTransport] = None,
                 adc_ref_voltage: Optional[float] = None):
        self._spi = transport if transport is not None else SpidevTransport()
        self._adc_ref_voltage = settings.ADC_REF_VOLTAGE
        self._dac_gain = DacGain.ONE
        self._max_dac_voltage = reg.DAC_MAX_VOLTAGE[1]
        self._closed = False

        if adc_ref_voltage is not None:
            self.set_adc_ref_voltage(adc_ref_voltage)

        logger.info(f"ADC-DAC Pi ready (Vref {self._adc_ref_voltage}V)")

    # -- ADC (MCP3202) --

    def read_adc_raw(self, channel: int, mode: int) -> int:
        """
        Read the raw 12-bit value (0-4095) from an ADC channel

        Args:
            channel: 1 or 2
            mode: 0 = single ended, 1 = differential. In differential mode
                channel 1 makes IN1 = IN+ / IN2 = IN-, channel 2 the reverse.
        """
        channel = reg.check_channel(channel)
        if isinstance(mode, bool) or mode not in (AcquisitionMode.SINGLE_ENDED,
                                                  AcquisitionMode.DIFFERENTIAL):
            raise InvalidArgument(f"Channel {channel} mode {mode!r} out of range (must be 0 or 1)")

        tx = [reg.ADC_START, reg.ADC_SELECT[(channel, int(mode))], reg.ADC_PAD]

        self._check_open()
        self._spi.select_chip(settings.ADC_CHIP_SELECT)
        self._spi.set_clock_divider(settings.ADC_CLOCK_DIVIDER)
        rx = self._spi.exchange(tx)

        raw = ((rx[1] & 0x0F) << 8) | rx[2]
        logger.debug(f"ADC ch{channel} mode {int(mode)}: tx [{reg.format_frame(tx)}] "
                     f"rx [{reg.format_frame(rx)}] -> {raw}")
        return raw

    def read_adc_voltage(self, channel: int, mode: int) -> float:
        """Read the voltage (0 to Vref) from an ADC channel"""
        raw = self.read_adc_raw(channel, mode)
        return (self._adc_ref_voltage / reg.ADC_RESOLUTION) * raw

    def set_adc_ref_voltage(self, voltage: float):
        """
        Set the ADC reference voltage.
        This should be the voltage measured on the Raspberry Pi 3.3V rail.
        """
        if isinstance(voltage, bool) or not isinstance(voltage, Real) or not voltage > 0:
            raise InvalidArgument(f"Reference voltage must be a positive number, got {voltage!r}")
        self._adc_ref_voltage = float(voltage)

    # -- DAC (MCP4822) --

    def set_dac_gain(self, gain: int):
        """
        Set the DAC gain. Gain 1 gives a 0-2.048V output range; gain 2 doubles
        the reference but the output is limited to the 3.3V supply.
        """
        if isinstance(gain, bool) or gain not in (DacGain.ONE, DacGain.TWO):
            raise InvalidArgument(f"Gain {gain!r} out of range (must be 1 or 2)")
        self._dac_gain = DacGain(gain)
        self._max_dac_voltage = reg.DAC_MAX_VOLTAGE[int(gain)]
        logger.debug(f"DAC gain {int(gain)}, max output {self._max_dac_voltage}V")

    def set_dac_voltage(self, channel: int, voltage: float):
        """
        Set a DAC channel output voltage

        Args:
            channel: 1 or 2
            voltage: 0 to 2.048V with gain 1, 0 to 3.3V with gain 2
        """
        channel = reg.check_channel(channel)
        if (isinstance(voltage, bool) or not isinstance(voltage, Real)
                or not 0 <= voltage <= self._max_dac_voltage):
            raise InvalidArgument(f"Voltage {voltage!r} out of range "
                                  f"(0-{self._max_dac_voltage}V at gain {int(self._dac_gain)})")

        raw = int(((voltage / reg.DAC_REF_VOLTAGE) * reg.ADC_RESOLUTION) / int(self._dac_gain))
        self.set_dac_raw(channel, raw)

    def set_dac_raw(self, channel: int, value: int):
        """Set the raw 12-bit value (0-4095) on a DAC channel"""
        channel = reg.check_channel(channel)
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= reg.DAC_MAX_RAW:
            raise InvalidArgument(f"Value {value!r} out of range (0-{reg.DAC_MAX_RAW})")

        high = ((value >> 8) & 0xFF
                | (channel - 1) << reg.DAC_CHANNEL_BIT
                | 1 << reg.DAC_GAIN_BIT
                | 1 << reg.DAC_ACTIVE_BIT)
        if self._dac_gain == DacGain.TWO:
            high = reg.update_byte(high, reg.DAC_GAIN_BIT, 0)
        tx = [high, value & 0xFF]

        self._check_open()
        self._spi.select_chip(settings.DAC_CHIP_SELECT)
        self._spi.set_clock_divider(settings.DAC_CLOCK_DIVIDER)
        self._spi.exchange(tx)
        logger.debug(f"DAC ch{channel}: tx [{reg.format_frame(tx)}] ({value})")

    # -- Lifecycle --

    def close(self):
        """Release the SPI devices for both chips. Calling again does nothing."""
        if self._closed:
            return
        self._closed = True
        self._spi.close()
        logger.info("ADC-DAC Pi closed")

    def _check_open(self):
        if self._closed:
            raise RuntimeError("ADC-DAC Pi driver is closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    @property
    def adc_ref_voltage(self) -> float:
        return self._adc_ref_voltage

    @property
    def dac_gain(self) -> DacGain:
        return self._dac_gain

    @property
    def max_dac_voltage(self) -> float:
        return self._max_dac_voltage

    @property
    def closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        return (f"ADCDAC(vref={self._adc_ref_voltage}, gain={int(self._dac_gain)}, "
                f"closed={self._closed})")
