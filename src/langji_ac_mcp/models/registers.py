"""Register scaling tables for the sensor and configuration blocks.

Each absolute holding-register address maps to one :class:`Transform`.
Addresses missing from a table are returned as the raw unsigned word.
The tables are fixed by the controller firmware and must not change.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Sequence

BAUD_RATES = (4800, 9600, 19200, 38400)

POWER_REGISTER = 0x0023
BAUD_RATE_REGISTER = 0x000E


class Transform(Enum):
    """Raw word to physical value conversions."""

    SIGNED_DIV10 = "signed_div10"
    UNSIGNED_DIV100 = "unsigned_div100"
    UNSIGNED_DIV10 = "unsigned_div10"
    UNSIGNED_DIV65280 = "unsigned_div65280"
    BAUD_RATE = "baud_rate"
    IDENTITY = "identity"


SENSOR_TRANSFORMS: dict[int, Transform] = {
    0x0000: Transform.SIGNED_DIV10,     # internal temperature sensor 1
    0x0001: Transform.SIGNED_DIV10,     # external temperature sensor 1
    0x0002: Transform.UNSIGNED_DIV100,
    0x0003: Transform.UNSIGNED_DIV100,
    0x0004: Transform.UNSIGNED_DIV100,
    0x0005: Transform.UNSIGNED_DIV10,
    0x0006: Transform.SIGNED_DIV10,     # humidity
    POWER_REGISTER: Transform.UNSIGNED_DIV65280,  # 0xFF00 -> 1.0
}

CONFIG_TRANSFORMS: dict[int, Transform] = {
    0x0000: Transform.SIGNED_DIV10,     # compressor start temperature
    0x0001: Transform.SIGNED_DIV10,     # compressor stop hysteresis
    0x0002: Transform.SIGNED_DIV10,     # heater start temperature
    0x0003: Transform.SIGNED_DIV10,     # heater stop hysteresis
    0x0004: Transform.SIGNED_DIV10,     # cabinet high temperature limit
    0x0005: Transform.SIGNED_DIV10,     # cabinet low temperature limit
    0x0006: Transform.UNSIGNED_DIV10,   # dehumidification start humidity
    0x0007: Transform.UNSIGNED_DIV10,   # dehumidification stop hysteresis
    0x0008: Transform.UNSIGNED_DIV10,   # high humidity alarm
    BAUD_RATE_REGISTER: Transform.BAUD_RATE,
    0x0012: Transform.UNSIGNED_DIV10,   # high voltage alarm
    0x0013: Transform.UNSIGNED_DIV10,   # low voltage alarm
}


def to_signed(value: int) -> int:
    """Interpret an unsigned 16-bit word as two's complement."""
    return value - 0x10000 if value > 0x7FFF else value


def apply_transform(transform: Transform, raw: int) -> int | float:
    """Convert one raw register word using ``transform``."""
    if transform is Transform.SIGNED_DIV10:
        return to_signed(raw) / 10.0
    if transform is Transform.UNSIGNED_DIV100:
        return raw / 100.0
    if transform is Transform.UNSIGNED_DIV10:
        return raw / 10.0
    if transform is Transform.UNSIGNED_DIV65280:
        return raw / 65280.0
    if transform is Transform.BAUD_RATE:
        return BAUD_RATES[raw] if raw < len(BAUD_RATES) else raw
    return raw


def decode_register(table: Mapping[int, Transform], address: int, raw: int) -> int | float:
    return apply_transform(table.get(address, Transform.IDENTITY), raw)


def decode_registers(
    table: Mapping[int, Transform], start_address: int, words: Sequence[int]
) -> dict[int, int | float]:
    """Decode consecutive register words starting at ``start_address``.

    Returns:
        Mapping of absolute address to decoded value, ascending.
    """
    return {
        start_address + i: decode_register(table, start_address + i, raw)
        for i, raw in enumerate(words)
    }

