"""
ADXL345 Accelerometer Driver for Discover DXB
=============================================

Feeds the detail-view parallax on the device build.

- I2C at 0x53 (ALT ADDRESS pin low), bus 1 on the Raspberry Pi
- Full-resolution mode, +/-2 g, 100 Hz output data rate
- Readings converted to m/s^2 so desktop and device feeds share one scale

Wiring: SDA=GPIO2, SCL=GPIO3, CS tied high for I2C mode.

Author: Discover DXB Team
License: MIT
"""

from __future__ import annotations

import logging
import time
from enum import IntEnum
from typing import Optional

import numpy as np
from smbus2 import SMBus

from discover.parallax import TiltSample

logger = logging.getLogger(__name__)

STANDARD_GRAVITY = 9.80665
FULL_RES_G_PER_LSB = 0.0039


class ADXL345Reg(IntEnum):
    DEVID = 0x00
    BW_RATE = 0x2C
    POWER_CTL = 0x2D
    DATA_FORMAT = 0x31
    DATAX0 = 0x32


DEVICE_ID = 0xE5
RATE_100HZ = 0x0A
MEASURE = 0x08
FULL_RES = 0x08


class ADXL345:
    I2C_ADDRESS = 0x53

    def __init__(self, bus: Optional[SMBus] = None, i2c_bus: int = 1, address: int = I2C_ADDRESS):
        """
        Args:
            bus: already-open SMBus (tests pass a mock); opened from i2c_bus otherwise
            i2c_bus: I2C bus number
            address: 7-bit device address
        """
        self.bus = bus if bus is not None else SMBus(i2c_bus)
        self.address = address
        self.initialized = False
        self._init_device()

    def _write_reg(self, reg: int, value: int) -> bool:
        try:
            self.bus.write_byte_data(self.address, reg, value & 0xFF)
            return True
        except OSError as e:
            logger.error(f"I2C write error reg=0x{reg:02X}: {e}")
            return False

    def _init_device(self):
        try:
            devid = self.bus.read_byte_data(self.address, ADXL345Reg.DEVID)
        except OSError as e:
            logger.error(f"ADXL345 not responding at 0x{self.address:02X}: {e}")
            return
        if devid != DEVICE_ID:
            logger.warning(f"unexpected device id 0x{devid:02X} (expected 0x{DEVICE_ID:02X})")

        ok = (
            self._write_reg(ADXL345Reg.BW_RATE, RATE_100HZ)
            and self._write_reg(ADXL345Reg.DATA_FORMAT, FULL_RES)
            and self._write_reg(ADXL345Reg.POWER_CTL, MEASURE)
        )
        self.initialized = ok
        if ok:
            logger.info(f"ADXL345 ready on 0x{self.address:02X}")

    def read(self) -> Optional[TiltSample]:
        """One reading in m/s^2, or None when the bus read fails."""
        try:
            block = self.bus.read_i2c_block_data(self.address, ADXL345Reg.DATAX0, 6)
        except OSError as e:
            logger.error(f"I2C read error: {e}")
            return None
        x, y, _z = np.frombuffer(bytes(block), dtype="<i2").astype(float) * FULL_RES_G_PER_LSB * STANDARD_GRAVITY
        return TiltSample(float(x), float(y), time.perf_counter())

    def close(self):
        self._write_reg(ADXL345Reg.POWER_CTL, 0x00)  # standby
        self.bus.close()
