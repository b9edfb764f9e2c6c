"""Function code constants and request payload builders.

Every multi-byte field is a big-endian unsigned 16-bit word. A value that
does not fit its field raises ``ValueError``. Values that fit are sent
as-is; the controller rejects out-of-range registers with an exception
response.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Iterable

from .framing import HEADER_SIZE, build_request

COIL_ON = 0xFF00
COIL_OFF = 0x0000

# Bytes of a write-multiple echo that are compared: unit, function, start, count
WRITE_MULTIPLE_ECHO_SIZE = HEADER_SIZE + 4


class FunctionCode(IntEnum):
    """Modbus function codes used by the controller."""

    READ_COILS = 0x01
    READ_DISCRETE_INPUTS = 0x02
    READ_HOLDING_REGISTERS = 0x03
    WRITE_SINGLE_COIL = 0x05
    WRITE_SINGLE_REGISTER = 0x06
    WRITE_MULTIPLE_REGISTERS = 0x10


def _word(value: int, name: str = "Value") -> bytes:
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"{name} must be 0-65535, got {value}")
    return value.to_bytes(2, "big")


def encode_register_value(value: int) -> bytes:
    """Encode a register value, accepting signed or unsigned 16-bit input.

    Negative values are written as two's complement, so signed
    temperature set-points can be passed directly.
    """
    if not -0x8000 <= value <= 0xFFFF:
        raise ValueError(f"Register value must be -32768..65535, got {value}")
    return (value & 0xFFFF).to_bytes(2, "big")


def bool_to_coil(value: bool) -> int:
    """Convert a boolean to the coil word (0xFF00 on, 0x0000 off)."""
    return COIL_ON if value else COIL_OFF


def int_to_hex(value: int) -> str:
    """Format a non-negative integer as ``0x`` plus at least four lowercase hex digits."""
    if value < 0:
        raise ValueError(f"Value must be non-negative, got {value}")
    return f"0x{value:04x}"


def build_read_payload(start_address: int, quantity: int) -> bytes:
    """Payload shared by all read functions: start address + quantity."""
    return _word(start_address, "Start address") + _word(quantity, "Quantity")


def build_write_single_coil_payload(address: int, value: bool) -> bytes:
    return _word(address, "Address") + _word(bool_to_coil(value))


def build_write_single_register_payload(address: int, value: int) -> bytes:
    return _word(address, "Address") + encode_register_value(value)


def build_write_multiple_registers_payload(
    start_address: int, values: Iterable[int]
) -> bytes:
    """Payload for function 0x10.

    Layout: start address, register count, byte count (1 byte), then the
    register values in order.
    """
    data = b"".join(encode_register_value(v) for v in values)
    if len(data) > 0xFF:
        raise ValueError(f"Byte count must be 0-255, got {len(data)}")
    count = len(data) // 2
    return (
        _word(start_address, "Start address")
        + _word(count)
        + bytes([len(data)])
        + data
    )


def build_expected_echo(
    unit_id: int, function_code: int, payload: bytes
) -> bytes:
    """Build the frame a device returns when it echoes a write request."""
    return build_request(unit_id, function_code, payload)


def build_expected_multiple_echo(
    unit_id: int, start_address: int, count: int
) -> bytes:
    """Build the reply to a write-multiple request: header, start and count."""
    return build_request(
        unit_id,
        FunctionCode.WRITE_MULTIPLE_REGISTERS,
        _word(start_address) + _word(count),
    )
