"""MCP server entry point for Langji air-conditioner controllers.

Exposes tools and resources via the Model Context Protocol using the
official Python MCP SDK with stdio transport.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP

from .client import LangjiACClient
from .models.descriptions import REGISTER_DESCRIPTIONS, format_register_values
from .models.registers import POWER_REGISTER
from .protocol.errors import ACControllerError
from .transport.tcp_connection import DEFAULT_PORT, DEFAULT_UNIT_ID

logger = logging.getLogger(__name__)

mcp = FastMCP(
    "langji-ac",
    instructions="MCP server for Langji air-conditioner controllers (Modbus RTU over TCP)",
)

# Global client state
_client: LangjiACClient | None = None


def _get_client() -> LangjiACClient:
    """Get the configured client, raising if not connected."""
    if _client is None:
        raise RuntimeError(
            "Not connected to device. Use the 'connect' tool first."
        )
    return _client


def _error(e: ACControllerError) -> dict[str, Any]:
    logger.warning("Device call failed: %s", e)
    return {"error": str(e)}


# ─── CONNECTION TOOLS ─────────────────────────────────────────────────

@mcp.tool()
def connect(
    host: str, port: int = DEFAULT_PORT, unit_id: int = DEFAULT_UNIT_ID
) -> dict[str, Any]:
    """Configure the controller address and check that it answers.

    Reads the system on/off register to confirm the device responds.

    Args:
        host: IP address or hostname of the controller.
        port: TCP port of the serial bridge (default 8000).
        unit_id: Modbus unit ID (default 1).
    """
    global _client
    try:
        client = LangjiACClient(host, port, unit_id)
    except ValueError as e:
        return {"error": str(e)}

    try:
        power = client.read_sensors(POWER_REGISTER, 1)[POWER_REGISTER]
    except ACControllerError as e:
        return _error(e)

    _client = client
    logger.info("Connected to %s", client.endpoint)
    return {
        "connected": True,
        "host": host,
        "port": port,
        "unit_id": unit_id,
        "power_on": power == 1.0,
    }


@mcp.tool()
def disconnect() -> dict[str, bool]:
    """Forget the configured controller."""
    global _client
    _client = None
    return {"disconnected": True}


# ─── READ TOOLS ───────────────────────────────────────────────────────

@mcp.tool()
def read_status(start_address: int = 0x0000, quantity: int = 10) -> dict[str, Any]:
    """Read running-state coils (compressor, heater, fans).

    Args:
        start_address: First coil address (default 0).
        quantity: Number of coils (default 10).
    """
    client = _get_client()
    try:
        values = client.read_status(start_address, quantity)
    except ACControllerError as e:
        return _error(e)
    return {"status": format_register_values(values)}


@mcp.tool()
def read_alarms(start_address: int = 0x0000, quantity: int = 32) -> dict[str, Any]:
    """Read alarm and warning flags.

    Args:
        start_address: First input address (default 0).
        quantity: Number of inputs (default 32).
    """
    client = _get_client()
    try:
        values = client.read_alarms(start_address, quantity)
    except ACControllerError as e:
        return _error(e)
    active = [address for address, bit in values.items() if bit]
    return {"alarms": format_register_values(values), "active": active}


@mcp.tool()
def read_sensors(start_address: int = 0x0000, quantity: int = 36) -> dict[str, Any]:
    """Read sensor registers (temperatures in °C, humidity in %, power switch).

    Args:
        start_address: First register address (default 0).
        quantity: Number of registers (default 36).
    """
    client = _get_client()
    try:
        values = client.read_sensors(start_address, quantity)
    except ACControllerError as e:
        return _error(e)
    return {"sensors": format_register_values(values)}


@mcp.tool()
def read_configuration(
    start_address: int = 0x0000, quantity: int = 21
) -> dict[str, Any]:
    """Read configuration registers (set-points, alarm limits, baud rate).

    Args:
        start_address: First register address (default 0).
        quantity: Number of registers (default 21).
    """
    client = _get_client()
    try:
        values = client.read_configuration(start_address, quantity)
    except ACControllerError as e:
        return _error(e)
    return {"configuration": format_register_values(values)}


# ─── WRITE TOOLS ──────────────────────────────────────────────────────

@mcp.tool()
def write_single_coil(address: int, value: bool) -> dict[str, Any]:
    """Switch a single relay coil on or off.

    Args:
        address: Coil address.
        value: True for on, False for off.
    """
    client = _get_client()
    try:
        client.write_single_coil(address, value)
    except ACControllerError as e:
        return _error(e)
    return {"success": True, "address": address, "value": value}


@mcp.tool()
def write_single_register(address: int, value: int) -> dict[str, Any]:
    """Write one holding register with a raw value.

    Temperatures are in tenths of a degree, e.g. 300 for 30.0 °C.

    Args:
        address: Register address.
        value: Raw register value (-32768..65535).
    """
    client = _get_client()
    try:
        client.write_single_register(address, value)
    except ValueError as e:
        return {"error": str(e)}
    except ACControllerError as e:
        return _error(e)
    return {"success": True, "address": address, "value": value}


@mcp.tool()
def write_multiple_registers(start_address: int, values: list[int]) -> dict[str, Any]:
    """Write consecutive holding registers with raw values.

    Args:
        start_address: First register address.
        values: Raw register values, one per register.
    """
    if not values:
        return {"error": "At least one value is required"}
    client = _get_client()
    try:
        client.write_multiple_registers(start_address, values)
    except ValueError as e:
        return {"error": str(e)}
    except ACControllerError as e:
        return _error(e)
    return {"success": True, "start_address": start_address, "count": len(values)}


@mcp.tool()
def set_power(on: bool) -> dict[str, Any]:
    """Switch the air conditioner on or off.

    Args:
        on: True to switch on, False to switch off.
    """
    client = _get_client()
    try:
        client.set_power(on)
    except ACControllerError as e:
        return _error(e)
    return {"success": True, "power_on": on}


# ─── RESOURCES ────────────────────────────────────────────────────────

@mcp.resource("langji://registers/descriptions")
def resource_register_descriptions() -> str:
    """Known register addresses and their labels."""
    return json.dumps(
        {f"0x{address:04X}": label for address, label in REGISTER_DESCRIPTIONS.items()},
        indent=2,
    )


@mcp.resource("langji://device/endpoint")
def resource_device_endpoint() -> str:
    """The controller this server is talking to."""
    if _client is None:
        return json.dumps({"connected": False})
    ep = _client.endpoint
    return json.dumps({
        "connected": True,
        "host": ep.host,
        "port": ep.port,
        "unit_id": ep.unit_id,
        "timeout": ep.timeout,
    })


# ─── ENTRY POINT ─────────────────────────────────────────────────────

def main():
    """Run the MCP server with stdio transport."""
    logging.basicConfig(level=logging.INFO)
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
