"""ADXL345 driver against a mocked SMBus."""

from unittest.mock import MagicMock

import pytest

from accelerometer import ADXL345, DEVICE_ID, ADXL345Reg

ADDR = 0x53


@pytest.fixture
def bus():
    b = MagicMock()
    b.read_byte_data.return_value = DEVICE_ID
    return b


class TestInit:
    def test_configures_device(self, bus):
        dev = ADXL345(bus=bus)

        assert dev.initialized
        bus.write_byte_data.assert_any_call(ADDR, ADXL345Reg.BW_RATE, 0x0A)
        bus.write_byte_data.assert_any_call(ADDR, ADXL345Reg.DATA_FORMAT, 0x08)
        bus.write_byte_data.assert_any_call(ADDR, 0x2D, 0x08)

    def test_missing_device(self, bus):
        bus.read_byte_data.side_effect = OSError(121, "Remote I/O error")

        dev = ADXL345(bus=bus)

        assert not dev.initialized
        bus.write_byte_data.assert_not_called()

    def test_unexpected_id_still_configures(self, bus, caplog):
        bus.read_byte_data.return_value = 0x00
        dev = ADXL345(bus=bus)
        assert dev.initialized
        assert "unexpected device id" in caplog.text

    def test_write_failure_leaves_uninitialized(self, bus):
        bus.write_byte_data.side_effect = OSError("bus busy")
        assert not ADXL345(bus=bus).initialized


class TestRead:
    def test_converts_to_ms2(self, bus):
        # x = +256 LSB, y = -256 LSB, z = 0
        bus.read_i2c_block_data.return_value = [0x00, 0x01, 0x00, 0xFF, 0x00, 0x00]
        sample = ADXL345(bus=bus).read()

        assert sample.x == pytest.approx(9.79, abs=0.01)
        assert sample.y == pytest.approx(-9.79, abs=0.01)
        bus.read_i2c_block_data.assert_called_with(ADDR, ADXL345Reg.DATAX0, 6)

    def test_read_error_returns_none(self, bus):
        bus.read_i2c_block_data.side_effect = OSError("nack")
        assert ADXL345(bus=bus).read() is None

    def test_close_puts_device_in_standby(self, bus):
        dev = ADXL345(bus=bus)
        dev.close()
        bus.write_byte_data.assert_called_with(ADDR, ADXL345Reg.POWER_CTL, 0x00)
        bus.close.assert_called_once()
