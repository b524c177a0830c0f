"""
ABE Boards - Driver Exceptions
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial exception hierarchy with error kinds
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Failure categories reported by the board drivers"""
    INVALID_ARGUMENT = "invalid_argument"
    OUT_OF_RANGE = "out_of_range"
    TRANSPORT = "transport"


class BoardError(Exception):
    """Base class for all driver failures"""
    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT


class InvalidArgument(BoardError, ValueError):
    """Channel, mode, gain, frequency or value outside the chip's legal domain"""
    kind = ErrorKind.INVALID_ARGUMENT


class OutOfRange(BoardError, ValueError):
    """Memory address or length outside the RTC's 0x08-0x3F window"""
    kind = ErrorKind.OUT_OF_RANGE


class TransportError(BoardError, OSError):
    """SPI or I2C transfer failed in the underlying bus device"""
    kind = ErrorKind.TRANSPORT
