"""Response parsing for read replies.

Both read shapes start with a byte count right after the header:

- bit reads (0x01, 0x02): ``count`` bytes of packed bits, LSB first
- register reads (0x03): ``count`` bytes of big-endian 16-bit words
"""

from __future__ import annotations

from .errors import PayloadTooShort
from .framing import split_frame


def _data_section(response: bytes) -> bytes:
    payload = split_frame(response).payload
    if not payload:
        raise PayloadTooShort(1, 0)
    byte_count = payload[0]
    return payload[1 : 1 + byte_count]


def parse_bits(response: bytes, start_address: int, quantity: int) -> dict[int, int]:
    """Extract ``quantity`` bits from a validated bit-read response.

    Returns:
        Mapping of absolute address to 0 or 1, in ascending address order.
    """
    data = _data_section(response)
    needed = (quantity + 7) // 8
    if len(data) < needed:
        raise PayloadTooShort(needed, len(data))

    result: dict[int, int] = {}
    for i in range(quantity):
        byte_index, bit_index = divmod(i, 8)
        result[start_address + i] = (data[byte_index] >> bit_index) & 0x01
    return result


def parse_registers(response: bytes, quantity: int) -> list[int]:
    """Extract ``quantity`` raw unsigned words from a register-read response."""
    data = _data_section(response)
    needed = quantity * 2
    if len(data) < needed:
        raise PayloadTooShort(needed, len(data))
    return [
        int.from_bytes(data[offset : offset + 2], "big")
        for offset in range(0, needed, 2)
    ]
