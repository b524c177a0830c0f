"""Drivers running against the simulated boards."""

import pytest

from abe_boards.adcdac import ADCDAC
from abe_boards.exceptions import TransportError
from abe_boards.models import DacGain
from abe_boards.rtc import RTCPi
from abe_boards.simulator import SimulatedADCDACBus, SimulatedDS1307


class TestSimulatedADCDACBus:
    """ADC-DAC Pi driver against the simulated MCP3202/MCP4822."""

    def test_adc_inputs(self) -> None:
        bus = SimulatedADCDACBus()
        bus.set_input(1, 0, 1000)
        bus.set_input(2, 1, 4095)
        board = ADCDAC(transport=bus)
        assert board.read_adc_raw(1, 0) == 1000
        assert board.read_adc_raw(2, 1) == 4095
        assert board.read_adc_raw(1, 1) == 0

    def test_adc_transaction_log(self) -> None:
        bus = SimulatedADCDACBus()
        ADCDAC(transport=bus).read_adc_raw(2, 0)
        line, divider, tx, rx = bus.transactions[0]
        assert (line, divider, tx) == (0, 140, [0x01, 0xC0, 0x00])
        assert len(rx) == 3

    def test_dac_outputs(self) -> None:
        bus = SimulatedADCDACBus()
        board = ADCDAC(transport=bus)
        board.set_dac_raw(1, 0x123)
        board.set_dac_gain(2)
        board.set_dac_voltage(2, 1.024)
        assert bus.outputs[1].value == 0x123
        assert bus.outputs[1].gain == DacGain.ONE
        assert bus.outputs[2].gain == DacGain.TWO
        assert bus.outputs[2].value == 1024
        assert bus.outputs[2].active is True

    def test_set_input_validation(self) -> None:
        bus = SimulatedADCDACBus()
        with pytest.raises(ValueError):
            bus.set_input(3, 0, 1)
        with pytest.raises(ValueError):
            bus.set_input(1, 0, 4096)

    def test_unused_line_floats_high(self) -> None:
        bus = SimulatedADCDACBus()
        bus.select_chip(2)
        assert bus.exchange([0x00, 0x00]) == [0xFF, 0xFF]

    def test_closed_bus(self) -> None:
        bus = SimulatedADCDACBus()
        board = ADCDAC(transport=bus)
        board.close()
        assert bus.closed
        with pytest.raises(TransportError):
            bus.select_chip(0)


class TestSimulatedDS1307:
    """Register-pointer behavior of the simulated DS1307."""

    def test_pointer_auto_increment(self) -> None:
        rtc = SimulatedDS1307()
        rtc.set_slave_address(0x68)
        rtc.write(bytes([0x10, 1, 2, 3]))
        rtc.write(bytes([0x11]))
        assert rtc.read(2) == bytes([2, 3])

    def test_pointer_wraps(self) -> None:
        rtc = SimulatedDS1307()
        rtc.set_slave_address(0x68)
        rtc.write(bytes([0x3F, 0xAA, 0xBB]))
        assert rtc.registers[0x3F] == 0xAA
        assert rtc.registers[0x00] == 0xBB

    def test_wrong_address_not_acknowledged(self) -> None:
        rtc = SimulatedDS1307()
        rtc.set_slave_address(0x50)
        with pytest.raises(TransportError):
            rtc.write(b"\x00")

    def test_driver_writes_control(self) -> None:
        sim = SimulatedDS1307()
        clock = RTCPi(transport=sim)
        clock.enable_output()
        clock.set_frequency(2)
        assert sim.registers[0x07] == 0x91
        assert sim.reads == []

    def test_driver_on_custom_address(self) -> None:
        sim = SimulatedDS1307(address=0x6F)
        clock = RTCPi(transport=sim, address=0x6F)
        clock.write_memory(0x08, [7])
        assert sim.registers[0x08] == 7
