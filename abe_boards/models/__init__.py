"""
ABE Boards - Data Models
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial models module
"""

from .board import (
    AcquisitionMode,
    DacGain,
    DacOutput,
    RtcControlStatus,
    SquareWaveFrequency,
)
