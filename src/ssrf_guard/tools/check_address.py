"""Tool for classifying a single address literal."""

import logging
from typing import Any, Dict

from mcp.types import Tool, TextContent, CallToolResult

from ..address import classify
from ..models import AddressFamily, Classification
from ..settings import Settings

logger = logging.getLogger(__name__)


class CheckAddressTool:
    """Tool for checking whether one address is safe to contact."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def get_tool_definition(self) -> Tool:
        """Get the tool definition for MCP."""
        return Tool(
            name="check_address",
            description=(
                "Check whether an IP address literal is public and safe to contact. "
                "Non-canonical spellings (octal, hex, short or integer forms) are rejected."
            ),
            inputSchema={
                "type": "object",
                "properties": {
                    "address": {
                        "type": "string",
                        "description": "IPv4 or IPv6 address literal to check",
                    },
                    "allow_documentation": {
                        "type": "boolean",
                        "description": "Treat documentation ranges (TEST-NET, 2001:db8::/32) as public",
                        "default": False,
                    },
                },
                "required": ["address"],
            },
        )

    async def execute(self, arguments: Dict[str, Any]) -> CallToolResult:
        """Execute the check_address tool."""
        try:
            address = arguments.get("address")
            if address is None:
                raise ValueError("address is required")
            if not isinstance(address, str):
                raise ValueError("address must be a string")

            allow_documentation = self.settings.resolve_allow_documentation(
                arguments.get("allow_documentation")
            )
            result = classify(address, allow_documentation=allow_documentation)

            if not result.is_public:
                logger.info(f"Blocked address {address!r}: {self._describe(result)}")

            return CallToolResult(
                content=[TextContent(type="text", text=self._format_summary(result))],
                structuredContent=result.model_dump(mode="json"),
            )

        except ValueError as e:
            logger.warning(f"Validation error in check_address: {e}")
            return CallToolResult(
                content=[TextContent(type="text", text=f"Validation Error: {e}")],
                isError=True,
            )
        except Exception as e:
            logger.error(f"Unexpected error in check_address: {e}")
            return CallToolResult(
                content=[TextContent(type="text", text=f"Unexpected Error: {e}")],
                isError=True,
            )

    @staticmethod
    def _describe(result: Classification) -> str:
        if result.family is AddressFamily.INVALID:
            return "not a canonical IP address"
        if result.category is None:
            return "public"
        return f"{result.category.value} ({result.network})"

    def _format_summary(self, result: Classification) -> str:
        """Create the human-readable verdict."""
        lines = [
            f"Address: {result.address}",
            f"Family: {result.family.value}",
        ]

        if result.normalized:
            lines.append(f"Normalized: {result.normalized}")
        if result.embedded_ipv4:
            lines.append(f"Embedded IPv4: {result.embedded_ipv4}")

        lines.append(f"Reason: {self._describe(result)}")

        if result.is_public:
            lines.append("✅ PUBLIC: safe to contact")
        else:
            lines.append("⛔ BLOCKED: do not contact this address")

        return "\n".join(lines)


def summarize(result: Classification) -> str:
    """One-line verdict used by the bulk tool."""
    verdict = "public" if result.is_public else "blocked"
    return f"{result.address}: {verdict} ({CheckAddressTool._describe(result)})"
