"""High-level client for Langji air-conditioner controllers.

Every public operation performs exactly one request/response round trip
through :func:`~.transport.tcp_connection.send_request` and either returns
fully decoded data or raises an :class:`~.protocol.errors.ACControllerError`.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .models.registers import (
    CONFIG_TRANSFORMS,
    POWER_REGISTER,
    SENSOR_TRANSFORMS,
    decode_registers,
)
from .protocol.commands import (
    WRITE_MULTIPLE_ECHO_SIZE,
    FunctionCode,
    bool_to_coil,
    build_expected_echo,
    build_expected_multiple_echo,
    build_read_payload,
    build_write_multiple_registers_payload,
    build_write_single_coil_payload,
    build_write_single_register_payload,
)
from .protocol.errors import WriteVerificationFailed
from .protocol.parser import parse_bits, parse_registers
from .transport.tcp_connection import (
    DEFAULT_TIMEOUT,
    DEFAULT_UNIT_ID,
    DeviceEndpoint,
    send_request,
)

logger = logging.getLogger(__name__)


class LangjiACClient:
    """Reads and writes a controller's coils and holding registers.

    Usage::

        ac = LangjiACClient("192.168.1.50", 8000)
        sensors = ac.read_sensors()
        ac.write_multiple_registers(0x0008, [300])
    """

    def __init__(
        self,
        host: str,
        port: int,
        unit_id: int = DEFAULT_UNIT_ID,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._endpoint = DeviceEndpoint(
            host=host, port=port, unit_id=unit_id, timeout=timeout
        )

    @property
    def endpoint(self) -> DeviceEndpoint:
        return self._endpoint

    @property
    def unit_id(self) -> int:
        return self._endpoint.unit_id

    def __repr__(self) -> str:
        return f"LangjiACClient({self._endpoint})"

    def send_request(self, function_code: int, payload: bytes) -> bytes:
        """Send a raw request and return the validated response frame."""
        return send_request(self._endpoint, function_code, payload)

    # ─── READS ───────────────────────────────────────────────────────

    def _read_bits(
        self, function_code: FunctionCode, start_address: int, quantity: int
    ) -> dict[int, int]:
        response = self.send_request(
            function_code, build_read_payload(start_address, quantity)
        )
        return parse_bits(response, start_address, quantity)

    def _read_registers(self, start_address: int, quantity: int) -> list[int]:
        response = self.send_request(
            FunctionCode.READ_HOLDING_REGISTERS,
            build_read_payload(start_address, quantity),
        )
        return parse_registers(response, quantity)

    def read_status(
        self, start_address: int = 0x0000, quantity: int = 10
    ) -> dict[int, int]:
        """Read the running-state coils (function 0x01).

        Returns:
            Mapping of address to 0 or 1.
        """
        return self._read_bits(FunctionCode.READ_COILS, start_address, quantity)

    def read_alarms(
        self, start_address: int = 0x0000, quantity: int = 32
    ) -> dict[int, int]:
        """Read the alarm and warning inputs (function 0x02)."""
        return self._read_bits(
            FunctionCode.READ_DISCRETE_INPUTS, start_address, quantity
        )

    def read_sensors(
        self, start_address: int = 0x0000, quantity: int = 36
    ) -> dict[int, int | float]:
        """Read sensor registers: temperatures, humidity, power switch.

        Returns:
            Mapping of address to scaled value.
        """
        words = self._read_registers(start_address, quantity)
        return decode_registers(SENSOR_TRANSFORMS, start_address, words)

    def read_configuration(
        self, start_address: int = 0x0000, quantity: int = 21
    ) -> dict[int, int | float]:
        """Read configuration registers: set-points, alarm limits, baud rate."""
        words = self._read_registers(start_address, quantity)
        return decode_registers(CONFIG_TRANSFORMS, start_address, words)

    # ─── WRITES ──────────────────────────────────────────────────────

    def _write_echoed(
        self, operation: str, function_code: FunctionCode, payload: bytes
    ) -> bool:
        response = self.send_request(function_code, payload)
        expected = build_expected_echo(self.unit_id, function_code, payload)
        if response != expected:
            raise WriteVerificationFailed(operation, expected, response)
        return True

    def write_single_coil(self, address: int, value: bool) -> bool:
        """Switch a relay coil on or off (function 0x05).

        The device must echo the request frame exactly.
        """
        return self._write_echoed(
            "write_single_coil",
            FunctionCode.WRITE_SINGLE_COIL,
            build_write_single_coil_payload(address, value),
        )

    def write_single_register(self, address: int, value: int) -> bool:
        """Write one holding register (function 0x06).

        Args:
            address: Register address.
            value: -32768..65535; negative values are sent as two's complement.
        """
        return self._write_echoed(
            "write_single_register",
            FunctionCode.WRITE_SINGLE_REGISTER,
            build_write_single_register_payload(address, value),
        )

    def write_multiple_registers(
        self, start_address: int, values: Sequence[int]
    ) -> bool:
        """Write consecutive holding registers (function 0x10).

        Only unit, function, start address and count of the reply are
        checked; the reply does not repeat the written values.
        """
        payload = build_write_multiple_registers_payload(start_address, values)
        response = self.send_request(FunctionCode.WRITE_MULTIPLE_REGISTERS, payload)

        expected = build_expected_multiple_echo(
            self.unit_id, start_address, len(values)
        )
        if response[:WRITE_MULTIPLE_ECHO_SIZE] != expected[:WRITE_MULTIPLE_ECHO_SIZE]:
            raise WriteVerificationFailed(
                "write_multiple_registers",
                expected[:WRITE_MULTIPLE_ECHO_SIZE],
                response[:WRITE_MULTIPLE_ECHO_SIZE],
            )
        return True

    def set_power(self, on: bool) -> bool:
        """Switch the controller on or off via the system switch register."""
        logger.info("Switching %s %s", self._endpoint, "on" if on else "off")
        return self.write_multiple_registers(POWER_REGISTER, [bool_to_coil(on)])
