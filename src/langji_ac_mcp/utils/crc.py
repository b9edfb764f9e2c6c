"""CRC-16/MODBUS checksum.

Reflected polynomial 0xA001, initial value 0xFFFF, no final XOR.
The result is transmitted low byte first.
"""

from __future__ import annotations

CRC_INIT = 0xFFFF
CRC_POLY = 0xA001


def crc16(data: bytes) -> int:
    """Compute the Modbus CRC-16 of ``data``."""
    crc = CRC_INIT
    for byte in data:
        crc ^= byte
        for _ in range(8):
            if crc & 0x0001:
                crc = (crc >> 1) ^ CRC_POLY
            else:
                crc >>= 1
    return crc
