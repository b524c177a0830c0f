"""
ABE Boards - Raspberry Pi Add-On Board Drivers
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial package with ADC-DAC Pi and RTC Pi drivers
"""

from .adcdac import ADCDAC
from .rtc import RTCPi
from .exceptions import BoardError, ErrorKind, InvalidArgument, OutOfRange, TransportError
from .models import AcquisitionMode, DacGain, SquareWaveFrequency

__version__ = "1.0.0"
