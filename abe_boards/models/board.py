"""
ABE Boards - Board Data Models
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial ADC-DAC Pi and RTC Pi models
"""

from enum import Enum

from pydantic import BaseModel, Field


class AcquisitionMode(int, Enum):
    """MCP3202 input modes"""
    SINGLE_ENDED = 0
    DIFFERENTIAL = 1


class DacGain(int, Enum):
    """MCP4822 output gain"""
    ONE = 1
    TWO = 2


class SquareWaveFrequency(int, Enum):
    """DS1307 square-wave rate selector values"""
    HZ_1 = 1
    KHZ_4_096 = 2
    KHZ_8_192 = 3
    KHZ_32_768 = 4


class RtcControlStatus(BaseModel):
    """Decoded view of the cached DS1307 control register"""
    control: int = Field(..., ge=0, le=0xFF, description="Last byte written to CONTROL")
    output_enabled: bool = Field(..., description="OUT bit (7)")
    square_wave_enabled: bool = Field(..., description="SQWE bit (4)")
    frequency: SquareWaveFrequency = Field(..., description="Rate select (bits 0-1)")
    frequency_hz: int = Field(..., description="Square-wave frequency in Hz")


class DacOutput(BaseModel):
    """DAC channel state decoded from an MCP4822 frame"""
    channel: int = Field(..., ge=1, le=2, description="DAC channel (1-2)")
    value: int = Field(..., ge=0, le=4095, description="12-bit raw output value")
    gain: DacGain = Field(..., description="Output gain selected by the GA bit")
    active: bool = Field(True, description="SHDN bit set (output enabled)")
