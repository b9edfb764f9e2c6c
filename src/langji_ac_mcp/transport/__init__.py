"""Transport layer: raw RTU frames over TCP."""

from .tcp_connection import DeviceEndpoint, TCPConnection, send_request
