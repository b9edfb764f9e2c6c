"""Exception hierarchy for controller communication.

Every failure raised by the client derives from :class:`ACControllerError`,
so callers that only want to report and carry on can catch that one type.
"""

from __future__ import annotations

MODBUS_EXCEPTION_MESSAGES: dict[int, str] = {
    0x01: "Illegal function",
    0x02: "Illegal data address",
    0x03: "Illegal data value",
    0x04: "Slave device failure",
    0x06: "Slave device busy",
    0x0C: "CRC check failure",
}


class ACControllerError(Exception):
    """Base class for all controller errors."""


class ConnectionFailed(ACControllerError):
    """The TCP connection could not be established or broke mid-call."""

    def __init__(self, errno: int | None, message: str) -> None:
        super().__init__(f"Connection failed: {errno} - {message}")
        self.errno = errno
        self.message = message


class ProtocolError(ACControllerError):
    """The device reply was missing, malformed or reported a fault."""


class EmptyResponse(ProtocolError):
    def __init__(self) -> None:
        super().__init__("No response from device")


class FrameTooShort(ProtocolError):
    def __init__(self, length: int) -> None:
        super().__init__(f"Response frame too short ({length} bytes)")
        self.length = length


class CrcMismatch(ProtocolError):
    def __init__(self, received: int, calculated: int) -> None:
        super().__init__(
            f"CRC check failed: received 0x{received:04X}, "
            f"calculated 0x{calculated:04X}"
        )
        self.received = received
        self.calculated = calculated


class UnitIdMismatch(ProtocolError):
    def __init__(self, expected: int, received: int) -> None:
        super().__init__(
            f"Response from unit {received}, expected unit {expected}"
        )
        self.expected = expected
        self.received = received


class PayloadTooShort(ProtocolError):
    """The reply's data section holds fewer bytes than the request needs."""

    def __init__(self, needed: int, available: int) -> None:
        super().__init__(
            f"Response payload too short: need {needed} bytes, got {available}"
        )
        self.needed = needed
        self.available = available


class ModbusException(ProtocolError):
    """The device answered with a Modbus exception response."""

    def __init__(self, code: int, message: str | None = None) -> None:
        if message is None:
            message = MODBUS_EXCEPTION_MESSAGES.get(code, f"Unknown error ({code})")
        super().__init__(f"Modbus error: {message}")
        self.code = code
        self.message = message


class UnknownModbusException(ModbusException):
    """Exception code outside the documented table."""

    def __init__(self, code: int) -> None:
        super().__init__(code, f"Unknown error ({code})")


class WriteVerificationFailed(ACControllerError):
    """A write reply did not echo the request."""

    def __init__(self, operation: str, expected: bytes, actual: bytes) -> None:
        super().__init__(
            f"{operation} verification failed: expected {expected.hex(' ')}, "
            f"got {actual.hex(' ') if actual else '(empty)'}"
        )
        self.operation = operation
        self.expected = expected
        self.actual = actual


def modbus_exception_for(code: int) -> ModbusException:
    """Return the exception instance matching a Modbus exception code."""
    if code in MODBUS_EXCEPTION_MESSAGES:
        return ModbusException(code)
    return UnknownModbusException(code)
