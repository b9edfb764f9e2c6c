"""Tests for the TCP transport with a mocked socket."""

from __future__ import annotations

import dataclasses
import socket
from unittest.mock import MagicMock, patch

import pytest

from langji_ac_mcp.protocol.errors import (
    ConnectionFailed,
    CrcMismatch,
    EmptyResponse,
    ModbusException,
)
from langji_ac_mcp.protocol.framing import build_request
from langji_ac_mcp.transport.tcp_connection import (
    DEFAULT_TIMEOUT,
    MAX_RESPONSE_SIZE,
    DeviceEndpoint,
    TCPConnection,
    send_request,
)

ENDPOINT = DeviceEndpoint(host="10.0.0.5", port=8000, unit_id=1)


@pytest.fixture
def mock_socket():
    sock = MagicMock()
    with patch("socket.create_connection", return_value=sock) as create:
        sock.create = create
        yield sock


def test_endpoint_defaults():
    ep = DeviceEndpoint(host="10.0.0.5")
    assert ep.port == 8000
    assert ep.unit_id == 1
    assert ep.timeout == DEFAULT_TIMEOUT == 5.0


def test_endpoint_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        ENDPOINT.unit_id = 2


def test_endpoint_rejects_bad_unit_id():
    with pytest.raises(ValueError):
        DeviceEndpoint(host="10.0.0.5", unit_id=300)


def test_send_request_round_trip(mock_socket):
    """The request is framed, sent, and the validated reply returned."""
    reply = build_request(0x01, 0x03, b"\x02\x00\xFA")
    mock_socket.recv.return_value = reply

    result = send_request(ENDPOINT, 0x03, b"\x00\x00\x00\x01")

    assert result == reply
    mock_socket.create.assert_called_once_with(("10.0.0.5", 8000), timeout=5.0)
    mock_socket.sendall.assert_called_once_with(
        bytes([0x01, 0x03, 0x00, 0x00, 0x00, 0x01, 0x84, 0x0A])
    )
    mock_socket.settimeout.assert_called_with(5.0)
    mock_socket.recv.assert_called_once_with(MAX_RESPONSE_SIZE)
    mock_socket.close.assert_called_once()


def test_send_request_uses_unit_id(mock_socket):
    ep = DeviceEndpoint(host="10.0.0.5", port=502, unit_id=7)
    mock_socket.recv.return_value = build_request(7, 0x03, b"\x02\x00\x00")
    send_request(ep, 0x03, b"\x00\x00\x00\x01")
    sent = mock_socket.sendall.call_args[0][0]
    assert sent[0] == 7


def test_connect_failure():
    """Socket errors while connecting become ConnectionFailed."""
    error = ConnectionRefusedError(111, "Connection refused")
    with patch("socket.create_connection", side_effect=error):
        with pytest.raises(ConnectionFailed) as exc_info:
            send_request(ENDPOINT, 0x03, b"\x00\x00\x00\x01")
    assert exc_info.value.errno == 111
    assert "Connection refused" in str(exc_info.value)


def test_read_timeout_is_empty_response(mock_socket):
    """A read timeout surfaces as no response, and the socket is closed."""
    mock_socket.recv.side_effect = socket.timeout("timed out")
    with pytest.raises(EmptyResponse):
        send_request(ENDPOINT, 0x03, b"\x00\x00\x00\x01")
    mock_socket.close.assert_called_once()


def test_read_error_closes_socket(mock_socket):
    mock_socket.recv.side_effect = ConnectionResetError(104, "Connection reset by peer")
    with pytest.raises(ConnectionFailed):
        send_request(ENDPOINT, 0x03, b"\x00\x00\x00\x01")
    mock_socket.close.assert_called_once()


def test_write_error_closes_socket(mock_socket):
    mock_socket.sendall.side_effect = BrokenPipeError(32, "Broken pipe")
    with pytest.raises(ConnectionFailed) as exc_info:
        send_request(ENDPOINT, 0x03, b"\x00\x00\x00\x01")
    assert exc_info.value.errno == 32
    mock_socket.close.assert_called_once()
    mock_socket.recv.assert_not_called()


def test_crc_error_closes_socket(mock_socket):
    reply = bytearray(build_request(0x01, 0x03, b"\x02\x00\xFA"))
    reply[3] ^= 0x01
    mock_socket.recv.return_value = bytes(reply)
    with pytest.raises(CrcMismatch):
        send_request(ENDPOINT, 0x03, b"\x00\x00\x00\x01")
    mock_socket.close.assert_called_once()


def test_modbus_exception_propagates(mock_socket):
    mock_socket.recv.return_value = build_request(0x01, 0x83, b"\x02")
    with pytest.raises(ModbusException) as exc_info:
        send_request(ENDPOINT, 0x03, b"\xFF\x00\x00\x01")
    assert exc_info.value.message == "Illegal data address"
    mock_socket.close.assert_called_once()


def test_connection_requires_open():
    conn = TCPConnection(ENDPOINT)
    assert not conn.connected
    with pytest.raises(ConnectionFailed):
        conn.write(b"\x01")
    with pytest.raises(ConnectionFailed):
        conn.read()


def test_connection_close_is_idempotent(mock_socket):
    conn = TCPConnection(ENDPOINT)
    conn.open()
    assert conn.connected
    conn.close()
    conn.close()
    assert not conn.connected
    mock_socket.close.assert_called_once()
