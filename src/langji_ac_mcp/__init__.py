"""Langji air-conditioner controller client (Modbus RTU over TCP)."""

from .client import LangjiACClient
from .models.descriptions import (
    describe_address,
    format_register_values,
    print_register_values,
)
from .protocol.commands import bool_to_coil, int_to_hex
from .protocol.errors import (
    ACControllerError,
    ConnectionFailed,
    ProtocolError,
    EmptyResponse,
    FrameTooShort,
    CrcMismatch,
    UnitIdMismatch,
    PayloadTooShort,
    ModbusException,
    UnknownModbusException,
    WriteVerificationFailed,
)
from .transport.tcp_connection import DeviceEndpoint
