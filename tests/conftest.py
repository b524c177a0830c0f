"""Shared fixtures: recording SPI and I2C transports."""

from collections import deque

import pytest

from abe_boards.adcdac import ADCDAC
from abe_boards.rtc import RTCPi


class RecordingSpi:
    """SPI transport that records every call and replays queued responses."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.responses: deque[list[int]] = deque()
        self.close_count = 0
        self.error: Exception | None = None

    def select_chip(self, line: int) -> None:
        self.calls.append(("select", line))

    def set_clock_divider(self, divider: int) -> None:
        self.calls.append(("divider", divider))

    def exchange(self, tx: list[int]) -> list[int]:
        self.calls.append(("exchange", list(tx)))
        if self.error is not None:
            raise self.error
        if self.responses:
            return self.responses.popleft()
        return [0] * len(tx)

    def close(self) -> None:
        self.close_count += 1

    @property
    def frames(self) -> list[list[int]]:
        return [call[1] for call in self.calls if call[0] == "exchange"]


class RecordingI2C:
    """I2C transport that records every call and replays queued read data."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.responses: deque[bytes] = deque()
        self.close_count = 0
        self.error: Exception | None = None

    def set_slave_address(self, address: int) -> None:
        self.calls.append(("address", address))

    def write(self, data: bytes) -> None:
        if self.error is not None:
            raise self.error
        self.calls.append(("write", bytes(data)))

    def read(self, length: int) -> bytes:
        self.calls.append(("read", length))
        if self.responses:
            return self.responses.popleft()
        return bytes(length)

    def close(self) -> None:
        self.close_count += 1

    @property
    def writes(self) -> list[bytes]:
        return [call[1] for call in self.calls if call[0] == "write"]

    @property
    def reads(self) -> list[int]:
        return [call[1] for call in self.calls if call[0] == "read"]


@pytest.fixture
def spi() -> RecordingSpi:
    return RecordingSpi()


@pytest.fixture
def i2c() -> RecordingI2C:
    return RecordingI2C()


@pytest.fixture
def board(spi) -> ADCDAC:
    """ADC-DAC Pi on a recording bus with the default 3.3V reference."""
    return ADCDAC(transport=spi, adc_ref_voltage=3.3)


@pytest.fixture
def rtc(i2c) -> RTCPi:
    """RTC Pi on a recording bus, with the construction write cleared."""
    clock = RTCPi(transport=i2c, century=2000)
    i2c.calls.clear()
    return clock
