"""TCP connection to a Langji controller's serial-to-Ethernet port.

The controller accepts raw Modbus RTU frames over TCP. Each request uses
its own connection: open, write one frame, read one reply, close.
"""

from __future__ import annotations

import logging
import socket
from dataclasses import dataclass

from ..protocol.errors import ConnectionFailed
from ..protocol.framing import build_request, split_frame, validate_response

logger = logging.getLogger(__name__)

DEFAULT_PORT = 8000
DEFAULT_UNIT_ID = 1
DEFAULT_TIMEOUT = 5.0  # seconds, used for both connect and read
MAX_RESPONSE_SIZE = 256


@dataclass(frozen=True)
class DeviceEndpoint:
    """Where to reach a controller and how long to wait for it."""

    host: str
    port: int = DEFAULT_PORT
    unit_id: int = DEFAULT_UNIT_ID
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not 0 <= self.unit_id <= 0xFF:
            raise ValueError(f"Unit ID must be 0-255, got {self.unit_id}")

    def __str__(self) -> str:
        return f"{self.host}:{self.port}/{self.unit_id}"


class TCPConnection:
    """A single TCP session with the controller.

    Usage::

        with TCPConnection(endpoint) as conn:
            conn.write(frame_bytes)
            response = conn.read()
    """

    def __init__(self, endpoint: DeviceEndpoint) -> None:
        self._endpoint = endpoint
        self._sock: socket.socket | None = None

    @property
    def connected(self) -> bool:
        return self._sock is not None

    @property
    def endpoint(self) -> DeviceEndpoint:
        return self._endpoint

    def open(self) -> None:
        """Connect to the controller.

        Raises:
            ConnectionFailed: If the connection is refused or times out.
        """
        ep = self._endpoint
        try:
            self._sock = socket.create_connection((ep.host, ep.port), timeout=ep.timeout)
        except OSError as e:
            raise ConnectionFailed(e.errno, e.strerror or str(e)) from e
        logger.debug("Connected to %s:%d", ep.host, ep.port)

    def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._sock is None:
            return
        try:
            self._sock.close()
        except OSError as e:
            logger.warning("Error closing socket: %s", e)
        finally:
            self._sock = None

    def write(self, data: bytes) -> None:
        """Send a whole frame.

        Raises:
            ConnectionFailed: If not connected or the send fails.
        """
        if self._sock is None:
            raise ConnectionFailed(None, "Not connected to device")
        try:
            self._sock.sendall(data)
        except OSError as e:
            raise ConnectionFailed(e.errno, e.strerror or str(e)) from e
        logger.debug("Sent request: %s", data.hex())

    def read(self, size: int = MAX_RESPONSE_SIZE) -> bytes:
        """Read one reply of at most ``size`` bytes.

        Returns:
            The received bytes, or ``b""`` if the read timed out.
        """
        if self._sock is None:
            raise ConnectionFailed(None, "Not connected to device")
        self._sock.settimeout(self._endpoint.timeout)
        try:
            data = self._sock.recv(size)
        except socket.timeout:
            logger.debug("Read timed out after %.1fs", self._endpoint.timeout)
            return b""
        except OSError as e:
            raise ConnectionFailed(e.errno, e.strerror or str(e)) from e
        logger.debug("Received response: %s", data.hex())
        return data

    def __enter__(self) -> TCPConnection:
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def send_request(endpoint: DeviceEndpoint, function_code: int, payload: bytes) -> bytes:
    """Perform one request/response round trip.

    Args:
        endpoint: The controller to talk to.
        function_code: Modbus function code.
        payload: Request payload (without header or CRC).

    Returns:
        The validated response frame.

    Raises:
        ConnectionFailed: On socket errors.
        ProtocolError: If the reply is missing, corrupt or an exception.
    """
    with TCPConnection(endpoint) as conn:
        request = build_request(endpoint.unit_id, function_code, payload)
        conn.write(request)
        response = conn.read()

    validated = validate_response(response)
    logger.debug("Validated %r", split_frame(validated))
    return validated
