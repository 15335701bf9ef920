"""Tool for classifying multiple address literals in one call."""

import logging
from typing import Any, Dict, List, Set, Tuple

from mcp.types import Tool, TextContent, CallToolResult

from ..address import classify
from ..models import BulkCheckResponse, Classification
from ..settings import Settings
from .check_address import summarize

logger = logging.getLogger(__name__)


class BulkCheckTool:
    """Tool for bulk checking multiple addresses."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def get_tool_definition(self) -> Tool:
        """Get the tool definition for MCP."""
        return Tool(
            name="bulk_check",
            description="Check multiple IP address literals in batch and report which are safe to contact",
            inputSchema={
                "type": "object",
                "properties": {
                    "addresses": {
                        "type": "array",
                        "items": {"type": "string"},
                        "description": "List of IP address literals to check",
                        "minItems": 1,
                        "maxItems": self.settings.max_bulk_addresses,
                    },
                    "allow_documentation": {
                        "type": "boolean",
                        "description": "Treat documentation ranges (TEST-NET, 2001:db8::/32) as public",
                        "default": False,
                    },
                },
                "required": ["addresses"],
            },
        )

    def _dedupe(self, addresses: List[Any]) -> Tuple[List[Any], int]:
        """Drop repeated literals, keeping first occurrences in order."""
        unique = []
        seen: Set[Tuple[str, str]] = set()
        skipped = 0

        for address in addresses:
            # Typed key so "None" and None stay distinct
            key = (type(address).__name__, address if isinstance(address, str) else repr(address))
            if key in seen:
                skipped += 1
                continue
            seen.add(key)
            unique.append(address)

        return unique, skipped

    def _classify_all(self, addresses: List[Any], allow_documentation: bool) -> List[Classification]:
        return [classify(address, allow_documentation=allow_documentation) for address in addresses]

    async def execute(self, arguments: Dict[str, Any]) -> CallToolResult:
        """Execute the bulk_check tool."""
        try:
            addresses = arguments.get("addresses")
            if not addresses:
                raise ValueError("addresses is required and must not be empty")
            if not isinstance(addresses, list):
                raise ValueError("addresses must be a list")
            if len(addresses) > self.settings.max_bulk_addresses:
                raise ValueError(
                    f"Maximum {self.settings.max_bulk_addresses} addresses allowed per request"
                )

            allow_documentation = self.settings.resolve_allow_documentation(
                arguments.get("allow_documentation")
            )

            unique, skipped = self._dedupe(addresses)
            if skipped:
                logger.info(f"Skipped {skipped} duplicate addresses")

            results = self._classify_all(unique, allow_documentation)
            public = sum(1 for result in results if result.is_public)

            response = BulkCheckResponse(
                results=results,
                total_requested=len(addresses),
                public=public,
                non_public=len(results) - public,
                duplicates_skipped=skipped,
            )

            return CallToolResult(
                content=[TextContent(type="text", text=self._format_summary(response))],
                structuredContent=response.model_dump(mode="json"),
            )

        except ValueError as e:
            logger.warning(f"Validation error in bulk_check: {e}")
            return CallToolResult(
                content=[TextContent(type="text", text=f"Validation Error: {e}")],
                isError=True,
            )
        except Exception as e:
            logger.error(f"Unexpected error in bulk_check: {e}")
            return CallToolResult(
                content=[TextContent(type="text", text=f"Unexpected Error: {e}")],
                isError=True,
            )

    def _format_summary(self, response: BulkCheckResponse) -> str:
        """Create summary text for bulk check results."""
        lines = [
            "Bulk Check Results:",
            f"Total Requested: {response.total_requested}",
            f"Public: {response.public}",
            f"Blocked: {response.non_public}",
        ]

        if response.duplicates_skipped:
            lines.append(f"Duplicates Skipped: {response.duplicates_skipped}")

        blocked = [result for result in response.results if not result.is_public]
        if blocked:
            lines.append("")
            lines.append("⛔ Blocked addresses:")
            for result in blocked[:20]:
                lines.append(f"  - {summarize(result)}")
            if len(blocked) > 20:
                lines.append(f"  ... and {len(blocked) - 20} more")

        return "\n".join(lines)
