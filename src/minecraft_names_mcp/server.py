"""
Minecraft Names MCP Server

An MCP server for checking availability of Minecraft nicks against the
Mojang profile API, falling back to CORS relays when Mojang blocks or
rate-limits direct requests.
"""

import json
import logging
import os

import httpx
from mcp.server.fastmcp import FastMCP

from .batch import RecordStatus, check_nicks_async
from .config import get_pacing_delay, get_relay_names, get_request_timeout
from .endpoints import MOJANG_PROFILE_URL

# Suppress httpx request logging by default
# Set MINECRAFT_NAMES_DEBUG=1 to enable verbose HTTP logging
if not os.environ.get("MINECRAFT_NAMES_DEBUG"):
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

# Server version
VERSION = "0.1.0"

# Initialize the MCP server
mcp = FastMCP("minecraft-names")
mcp._mcp_server.version = VERSION


# =============================================================================
# Nick Checking
# =============================================================================

async def _check_nicks_internal(
    nicks: list[str],
    transport: httpx.AsyncBaseTransport | None = None,
    delay: float | None = None,
) -> dict:
    """Run a batch and build the response dict."""
    batch = await check_nicks_async(
        nicks,
        delay=get_pacing_delay() if delay is None else delay,
        timeout=get_request_timeout(),
        relays=get_relay_names(),
        transport=transport,
    )

    taken_list = []
    errors_list = []
    for record in batch.results.values():
        if record.status == RecordStatus.TAKEN:
            taken_list.append(record.nick)
        elif record.status == RecordStatus.ERROR:
            errors_list.append({"nick": record.nick, "error": record.error_message})

    stats = batch.stats()
    return {
        "available": batch.available_nicks(),
        "taken": taken_list,
        "errors": errors_list,
        "summary": {
            "total": stats.total,
            "available": stats.available,
            "taken": stats.taken,
            "errors": stats.errors,
        },
    }


# =============================================================================
# MCP Tools
# =============================================================================

@mcp.tool()
def version() -> str:
    """
    Get the version of the Minecraft Names MCP server.

    Returns:
        Version string including server name and version number.
    """
    return f"Minecraft Names MCP Server version {VERSION}"


@mcp.tool()
def get_relays() -> str:
    """
    Get the lookup chain used for nick checks.

    Returns:
        JSON with the Mojang URL template and the relay names tried, in order,
        when Mojang cannot be reached directly.
    """
    return json.dumps({
        "primary": MOJANG_PROFILE_URL + "{nick}",
        "relays": get_relay_names(),
    })


@mcp.tool()
async def check_nicks(
    nicks: list[str],
    onlyReportAvailable: bool = False
) -> str:
    """
    Check Minecraft nick availability.

    Nicks are checked one at a time with a short pause between them to avoid
    rate limiting, so large lists take a while. Names differing only in case
    are the same nick and are reported once.

    Args:
        nicks: List of nicks to check
        onlyReportAvailable: If true, only return available nicks in response

    Returns:
        JSON with available nicks (sorted), taken nicks and errors
        (unless onlyReportAvailable), and summary counts.
    """
    nicks = [n.strip() for n in nicks if n and n.strip()]
    if not nicks:
        return json.dumps({"error": "No nicks provided"})

    response = await _check_nicks_internal(nicks)

    if onlyReportAvailable:
        del response["taken"]
        del response["errors"]

    return json.dumps(response)
