"""Tool for strict IPv4 normalization to a 32-bit integer."""

import logging
from typing import Any, Dict

from mcp.types import Tool, TextContent, CallToolResult

from ..ipv4 import INVALID_LONG, normalize_to_long
from ..settings import Settings

logger = logging.getLogger(__name__)


class NormalizeIPv4Tool:
    """Tool exposing normalize_to_long."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def get_tool_definition(self) -> Tool:
        """Get the tool definition for MCP."""
        return Tool(
            name="normalize_ipv4",
            description=(
                "Convert a canonical dotted-decimal IPv4 address to its 32-bit integer value. "
                "Returns -1 for any other spelling."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "address": {
                        "type": "string",
                        "description": "Dotted-decimal IPv4 address, e.g. 192.168.1.1",
                    },
                },
                "required": ["address"],
            },
        )

    async def execute(self, arguments: Dict[str, Any]) -> CallToolResult:
        """Execute the normalize_ipv4 tool."""
        try:
            if "address" not in arguments:
                raise ValueError("address is required")

            address = arguments["address"]
            value = normalize_to_long(address)

            if value == INVALID_LONG:
                text = f"{address!r} is not a canonical IPv4 address (-1)"
            else:
                text = f"{address} -> {value}"

            return CallToolResult(
                content=[TextContent(type="text", text=text)],
                structuredContent={
                    "address": address if isinstance(address, str) else None,
                    "value": value,
                    "valid": value != INVALID_LONG,
                },
            )

        except ValueError as e:
            logger.warning(f"Validation error in normalize_ipv4: {e}")
            return CallToolResult(
                content=[TextContent(type="text", text=f"Validation Error: {e}")],
                isError=True,
            )
