"""Modbus RTU frame builder and validator.

Frame layout::

    +---------+----------+------------------+--------+--------+
    | Unit ID | Function |     Payload      | CRC lo | CRC hi |
    | 1 byte  | 1 byte   | variable length  | 1 byte | 1 byte |
    +---------+----------+------------------+--------+--------+

- Unit ID: Modbus slave address of the controller
- Function: operation selector; bit 0x80 marks an exception response
- Payload: big-endian register fields
- CRC: CRC-16/MODBUS over unit ID + function + payload, little-endian

The frame is sent as-is over TCP (no MBAP header).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..utils.crc import crc16
from .errors import (
    CrcMismatch,
    EmptyResponse,
    FrameTooShort,
    UnitIdMismatch,
    modbus_exception_for,
)

HEADER_SIZE = 2  # unit id + function code
CRC_SIZE = 2
MIN_FRAME_SIZE = HEADER_SIZE + CRC_SIZE
EXCEPTION_FLAG = 0x80


@dataclass
class Frame:
    """A parsed RTU frame with the CRC stripped."""

    unit_id: int
    function_code: int
    payload: bytes

    def __repr__(self) -> str:
        return (
            f"Frame(unit_id={self.unit_id}, "
            f"function_code=0x{self.function_code:02X}, "
            f"payload={self.payload.hex(' ') if self.payload else '(empty)'})"
        )


def append_crc(body: bytes) -> bytes:
    """Append the little-endian CRC-16 of ``body``."""
    return body + crc16(body).to_bytes(2, "little")


def build_request(unit_id: int, function_code: int, payload: bytes = b"") -> bytes:
    """Build a complete RTU request frame.

    Args:
        unit_id: Modbus unit address 0-255.
        function_code: Function code 0-255.
        payload: Function-specific request bytes.

    Returns:
        ``unit_id + function_code + payload + crc``.
    """
    if not 0 <= unit_id <= 0xFF:
        raise ValueError(f"Unit ID must be 0-255, got {unit_id}")
    if not 0 <= function_code <= 0xFF:
        raise ValueError(f"Function code must be 0-255, got {function_code}")
    return append_crc(bytes([unit_id, function_code]) + payload)


def validate_response(data: bytes, expected_unit_id: int | None = None) -> bytes:
    """Check a response frame's length, CRC and exception flag.

    Args:
        data: Raw bytes received from the device.
        expected_unit_id: If given, the frame must come from this unit.

    Returns:
        The validated frame, unchanged (header and CRC included).

    Raises:
        EmptyResponse: Nothing was received.
        FrameTooShort: Fewer than 4 bytes were received.
        CrcMismatch: The trailing CRC does not match the frame contents.
        UnitIdMismatch: The frame came from a different unit.
        ModbusException: The device reported an exception.
    """
    if not data:
        raise EmptyResponse()
    if len(data) < MIN_FRAME_SIZE:
        raise FrameTooShort(len(data))

    received = int.from_bytes(data[-CRC_SIZE:], "little")
    calculated = crc16(data[:-CRC_SIZE])
    if received != calculated:
        raise CrcMismatch(received, calculated)

    if expected_unit_id is not None and data[0] != expected_unit_id:
        raise UnitIdMismatch(expected_unit_id, data[0])

    if data[1] & EXCEPTION_FLAG:
        # A bare 4-byte exception frame carries no code
        code = data[2] if len(data) > MIN_FRAME_SIZE else 0
        raise modbus_exception_for(code)

    return bytes(data)


def split_frame(data: bytes) -> Frame:
    """Split an already validated frame into header fields and payload."""
    return Frame(
        unit_id=data[0],
        function_code=data[1],
        payload=bytes(data[HEADER_SIZE:-CRC_SIZE]),
    )
