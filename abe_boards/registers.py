"""
ABE Boards - Register Maps and Bit Helpers
Version: 1.0.0

Changelog:
v1.0.0 (2026-10-19): Initial register definitions for MCP3202, MCP4822, DS1307

NOTE ON SCOPE:
  ADC-DAC Pi: MCP3202 (2ch 12-bit ADC) on CE0, MCP4822 (2ch 12-bit DAC) on CE1
  RTC Pi:     DS1307 clock/calendar with 56 bytes of battery-backed RAM
"""

from .exceptions import InvalidArgument, OutOfRange

# =============================================================================
# MCP3202 ADC (SPI, CE0)
# =============================================================================
#
# Request:  [0x01, select, 0x00]
#   byte0 = start bit
#   byte1 = SGL/DIFF + ODD/SIGN + MSBF (upper 3 bits)
# Response: 12 significant bits = (rx[1] & 0x0F) << 8 | rx[2]
#

ADC_START = 0x01
ADC_PAD = 0x00
ADC_FRAME_LENGTH = 3
ADC_MAX_RAW = 4095
ADC_RESOLUTION = 4096

# (channel, mode) -> select byte
# mode 0 = single ended, mode 1 = differential
# Differential ch1: IN1 = IN+, IN2 = IN-; ch2: IN1 = IN-, IN2 = IN+
ADC_SELECT = {
    (1, 0): 0x80,
    (1, 1): 0x00,
    (2, 0): 0xC0,
    (2, 1): 0x40,
}

# =============================================================================
# MCP4822 DAC (SPI, CE1)
# =============================================================================
#
# byte0: [A/B  -  GA  SHDN  D11 D10 D9 D8]
# byte1: [D7 .. D0]
#

DAC_CHANNEL_BIT = 7            # 0 = DAC A (channel 1), 1 = DAC B (channel 2)
DAC_GAIN_BIT = 5               # 1 = 1x gain, 0 = 2x gain
DAC_ACTIVE_BIT = 4             # 1 = output active (not shutdown)
DAC_FRAME_LENGTH = 2
DAC_MAX_RAW = 4095
DAC_REF_VOLTAGE = 2.048        # Internal reference

# gain -> maximum output voltage
DAC_MAX_VOLTAGE = {
    1: 2.048,
    2: 3.3,                    # Limited by the 3.3V supply rail
}

# =============================================================================
# DS1307 RTC (I2C, 0x68)
# =============================================================================

SECONDS = 0x00
MINUTES = 0x01
HOURS = 0x02
DAYOFWEEK = 0x03
DAY = 0x04
MONTH = 0x05
YEAR = 0x06
CONTROL = 0x07

DATE_REGISTERS = (SECONDS, MINUTES, HOURS, DAYOFWEEK, DAY, MONTH, YEAR)

# Battery-backed RAM (56 bytes)
MEMORY_START = 0x08
MEMORY_END = 0x3F

# =============================================================================
# DS1307 Control Register Bits (CONTROL, 0x07)
# =============================================================================

CONTROL_OUT_BIT = 7            # Output level / enable
CONTROL_SQWE_BIT = 4           # Square-wave enable
CONTROL_RS0_BIT = 0            # Rate select
CONTROL_RS1_BIT = 1

# frequency selector -> (RS1, RS0)
FREQUENCY_RATE_SELECT = {
    1: (0, 0),                 # 1Hz
    2: (0, 1),                 # 4.096KHz
    3: (1, 0),                 # 8.192KHz
    4: (1, 1),                 # 32.768KHz
}

FREQUENCY_HZ = {
    1: 1,
    2: 4096,
    3: 8192,
    4: 32768,
}

# =============================================================================
# Helper Functions
# =============================================================================

def bcd_to_dec(value: int) -> int:
    """Convert a BCD formatted byte to decimal"""
    return value - 6 * (value >> 4)


def dec_to_bcd(value: int) -> int:
    """
    Convert a decimal number (0-99) to BCD

    Raises:
        InvalidArgument: If value is negative or has more than 2 digits
    """
    if not 0 <= value <= 99:
        raise InvalidArgument(f"Value {value} cannot be BCD encoded (0-99)")
    return ((value // 10) << 4) | (value % 10)


def update_byte(byte: int, bit: int, value) -> int:
    """Set (value truthy) or clear a single bit in a byte"""
    if value:
        return (byte | (1 << bit)) & 0xFF
    return byte & ~(1 << bit) & 0xFF


def check_channel(channel) -> int:
    """
    Validate an ADC/DAC channel number

    Raises:
        InvalidArgument: If channel is not 1 or 2
    """
    if isinstance(channel, bool) or channel not in (1, 2):
        raise InvalidArgument(f"Channel {channel!r} out of range (must be 1 or 2)")
    return int(channel)


def check_memory_window(address: int, length: int):
    """
    Validate a battery-backed RAM access

    Raises:
        OutOfRange: If address is outside 0x08-0x3F or the access runs past 0x3F
        InvalidArgument: If address is not an integer
    """
    if isinstance(address, bool) or not isinstance(address, int):
        raise InvalidArgument(f"Memory address {address!r} is not an integer")
    if not MEMORY_START <= address <= MEMORY_END:
        raise OutOfRange(f"Memory address 0x{address:02X} outside of range: "
                         f"0x{MEMORY_START:02X} to 0x{MEMORY_END:02X}")
    if address + length - 1 > MEMORY_END:
        raise OutOfRange(f"Memory overflow: 0x{address:02X} + {length} bytes "
                         f"exceeds 0x{MEMORY_END:02X}")


def parse_control_flags(config: int) -> dict:
    """
    Parse a DS1307 control byte into flag dictionary

    Args:
        config: Control register value

    Returns:
        Dictionary with output/square-wave flags and frequency selector (1-4)
    """
    rate_select = (
        (config >> CONTROL_RS1_BIT) & 0x01,
        (config >> CONTROL_RS0_BIT) & 0x01,
    )
    frequency = next(f for f, rs in FREQUENCY_RATE_SELECT.items() if rs == rate_select)
    return {
        'output_enabled': bool(config & (1 << CONTROL_OUT_BIT)),
        'square_wave_enabled': bool(config & (1 << CONTROL_SQWE_BIT)),
        'frequency': frequency,
    }


def format_frame(frame) -> str:
    """Hex dump of a bus frame for debug logging"""
    return " ".join(f"{b:02X}" for b in frame)
