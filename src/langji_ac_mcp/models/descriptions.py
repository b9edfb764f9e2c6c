"""Human-readable register labels and result formatting."""

from __future__ import annotations

import sys
from typing import Mapping, TextIO

UNKNOWN_PARAMETER = "Unknown parameter"
RESERVED = "Reserved value"

REGISTER_DESCRIPTIONS: dict[int, str] = {
    0x0000: "Internal temperature sensor 1",
    0x0001: "External temperature sensor 1",
    0x0002: RESERVED,
    0x0003: RESERVED,
    0x0004: RESERVED,
    0x0005: RESERVED,
    0x0006: "Humidity level",
    0x0007: RESERVED,
    0x0008: "Cooling start temperature",
    0x0009: "Cooling stop threshold",
    0x000A: "Heating start threshold",
    0x000B: "Heating stop threshold",
    0x000C: "Heat pipe start temperature",
    0x000D: "Heat pipe stop temperature",
    0x000E: "High temperature alarm threshold",
    0x000F: "Low temperature alarm threshold",
    0x0010: "Dehumidification start humidity",
    0x0011: "Dehumidification stop humidity",
    0x0012: "Temperature sensor 1 calibration",
    0x0013: "Temperature sensor 2 calibration",
    0x0014: "Pressure alarm setting",
    0x0015: "Temperature sensor 1 sensitivity enable",
    0x0016: "Temperature sensor 2 sensitivity enable",
    0x0017: "Humidity sensor enable",
    0x0018: "Compressor mode",
    0x0019: "Electric heater mode",
    0x001A: "Internal fan mode",
    0x001B: "External fan mode",
    0x001C: "Temperature sensor 1 fault setting",
    0x001D: "Temperature sensor 2 fault setting",
    0x001E: "Humidity fault setting",
    0x001F: "High temperature alarm fault setting",
    0x0020: "Low temperature alarm fault setting",
    0x0021: "Pressure alarm fault setting",
    0x0022: "Freeze alarm fault setting",
    0x0023: "System (controller) on/off switch",
}


def describe_address(address: int) -> str:
    return REGISTER_DESCRIPTIONS.get(address, UNKNOWN_PARAMETER)


def format_register_values(values: Mapping[int, int | float]) -> list[dict]:
    """Turn a read result into address/description/value rows."""
    return [
        {
            "address": f"0x{address:04X}",
            "description": describe_address(address),
            "value": value,
        }
        for address, value in values.items()
    ]


def format_lines(values: Mapping[int, int | float]) -> list[str]:
    return [
        f"0x{address:04X}({address}),{describe_address(address)}, Value: {value}"
        for address, value in values.items()
    ]


def print_register_values(
    values: Mapping[int, int | float], file: TextIO | None = None
) -> None:
    """Print one ``address(decimal),label, Value: value`` line per entry."""
    out = file if file is not None else sys.stdout
    for line in format_lines(values):
        print(line, file=out)
