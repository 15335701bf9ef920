"""MCP Server exposing the SSRF address classifier."""

import asyncio
import json
import logging
import sys
from typing import Any

from mcp.server import Server, NotificationOptions
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import (
    Resource,
    Tool,
    TextContent,
    TextResourceContents,
    Prompt,
    PromptArgument,
    GetPromptResult,
    PromptMessage,
    CallToolResult,
)
from pydantic import AnyUrl

from .models import AddressFamily, RangeEntry
from .settings import Settings
from .tools.bulk_check import BulkCheckTool
from .tools.check_address import CheckAddressTool
from .tools.normalize_ipv4 import NormalizeIPv4Tool
from .utils.ip_utils import iter_ranges

logger = logging.getLogger(__name__)

SERVER_NAME = "mcp-ssrf-guard"
SERVER_VERSION = "0.1.0"


class MCPSSRFGuardServer:
    """MCP Server for SSRF-safe address classification."""

    def __init__(self):
        print("[MCP SSRF Guard] Initializing settings...", file=sys.stderr)
        self.settings = Settings()

        self.server = Server(SERVER_NAME)

        self.tools = {
            "check_address": CheckAddressTool(self.settings),
            "normalize_ipv4": NormalizeIPv4Tool(self.settings),
            "bulk_check": BulkCheckTool(self.settings),
        }

        self._register_handlers()

        print("[MCP SSRF Guard] Server initialized successfully", file=sys.stderr)

    def _register_handlers(self):
        """Register MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> list[Tool]:
            """List available tools."""
            tools: list[Tool] = []
            for tool in self.tools.values():
                tools.append(await tool.get_tool_definition())
            return tools

        @self.server.call_tool()
        async def handle_call_tool(name: str, arguments: dict) -> Any:
            """Handle tool calls."""
            return await self._call_tool(name, arguments)

        @self.server.list_resources()
        async def handle_list_resources() -> list[Resource]:
            """List available resources."""
            return [
                Resource(
                    uri=AnyUrl("ranges://table"),
                    name="Classification Ranges",
                    description="Non-public IPv4 and IPv6 ranges in match order",
                    mimeType="application/json",
                ),
                Resource(
                    uri=AnyUrl("doc://usage"),
                    name="Usage Documentation",
                    description="Tool usage documentation and examples",
                    mimeType="text/markdown",
                ),
            ]

        @self.server.read_resource()
        async def handle_read_resource(uri: AnyUrl) -> list[TextResourceContents]:
            """Handle resource reads."""
            return self._read_resource(uri)

        @self.server.list_prompts()
        async def handle_list_prompts() -> list[Prompt]:
            """List available prompts."""
            return [
                Prompt(
                    name="review_address",
                    description="Generate a reviewer note for a blocked or allowed address",
                    arguments=[
                        PromptArgument(
                            name="classification",
                            description="Structured result of the check_address tool",
                            required=True,
                        )
                    ],
                )
            ]

        @self.server.get_prompt()
        async def handle_get_prompt(name: str, arguments: dict) -> GetPromptResult:
            """Handle prompt requests."""
            return self._get_prompt(name, arguments)

    async def _call_tool(self, name: str, arguments: dict) -> Any:
        if name not in self.tools:
            raise ValueError(f"Unknown tool: {name}")

        result = await self.tools[name].execute(arguments or {})

        if isinstance(result, CallToolResult):
            if result.isError:
                message = 'Tool execution failed.'
                for block in result.content:
                    if isinstance(block, TextContent):
                        message = block.text
                        break
                raise RuntimeError(message)

            content = list(result.content) if result.content else []
            if result.structuredContent is not None:
                return content, result.structuredContent
            return content

        return result

    def _read_resource(self, uri: AnyUrl) -> list[TextResourceContents]:
        uri_str = str(uri)

        if uri_str == "ranges://table":
            payload = json.dumps(self._get_range_table(), indent=2)
            return [TextResourceContents(uri=uri, text=payload, mimeType="application/json")]

        elif uri_str == "doc://usage":
            return [
                TextResourceContents(
                    uri=uri,
                    text=self._get_usage_documentation(),
                    mimeType="text/markdown",
                )
            ]

        else:
            raise ValueError(f"Unknown resource: {uri}")

    def _get_prompt(self, name: str, arguments: dict) -> GetPromptResult:
        if name != "review_address":
            raise ValueError(f"Unknown prompt: {name}")

        classification = (arguments or {}).get("classification", {})
        if isinstance(classification, str):
            try:
                classification = json.loads(classification)
            except json.JSONDecodeError:
                classification = {"address": classification}

        return GetPromptResult(
            description="Review of an address classification",
            messages=[
                PromptMessage(
                    role="user",
                    content=TextContent(
                        type="text",
                        text=self._generate_review_prompt(classification),
                    ),
                )
            ],
        )

    def _get_range_table(self) -> list[dict]:
        """Serialise both classification tables in match order."""
        entries = []
        for family in (AddressFamily.IPV4, AddressFamily.IPV6):
            for network, category in iter_ranges(family):
                entry = RangeEntry(family=family, network=str(network), category=category)
                entries.append(entry.model_dump(mode="json"))
        return entries

    def _get_usage_documentation(self) -> str:
        """Generate usage documentation."""
        return """# MCP SSRF Guard Usage Documentation

## Available Tools

### check_address
Decide whether an IP address literal is public and safe to contact.
- **address** (required): IPv4 or IPv6 literal
- **allow_documentation** (optional): treat TEST-NET and 2001:db8::/32 as public (default: false)

Only canonical spellings are accepted. `127.1`, `0177.0.0.1`, `0x7f.0.0.1`,
`2130706433` and `001.002.003.004` are all blocked as malformed.

Documentation ranges are blocked by default, so `203.0.113.1` (TEST-NET-3)
is reported as not public. Earlier `ip.isPublic` test suites expected `true`
for that address; pass `allow_documentation: true` or set
`SSRF_GUARD_ALLOW_DOCUMENTATION_RANGES=true` to keep that behaviour.

### normalize_ipv4
Convert a dotted-decimal IPv4 address to its 32-bit integer value.
- **address** (required): IPv4 literal; any non-canonical form returns -1

### bulk_check
Check several literals at once.
- **addresses** (required): list of literals (duplicates are skipped)
- **allow_documentation** (optional): as for check_address

## Available Resources

### ranges://table
The non-public ranges for both address families, in match order.

### doc://usage
This usage documentation.

## Available Prompts

### review_address
Generate a short reviewer note for a check_address result.

## Examples

Check a single address:
```json
{
  "tool": "check_address",
  "arguments": {
    "address": "::ffff:127.0.0.1"
  }
}
```

Check several addresses:
```json
{
  "tool": "bulk_check",
  "arguments": {
    "addresses": ["8.8.8.8", "10.0.0.1", "127.1"]
  }
}
```
"""

    def _generate_review_prompt(self, classification: dict) -> str:
        """Generate review prompt for an address classification."""
        if not classification:
            return "No classification data provided for review."

        address = classification.get("address", "Unknown")
        family = classification.get("family", "unknown")
        normalized = classification.get("normalized") or "n/a"
        verdict = "PUBLIC" if classification.get("is_public") else "BLOCKED"
        category = classification.get("category") or "none"
        network = classification.get("network") or "none"
        embedded = classification.get("embedded_ipv4") or "none"

        return f"""Review this outbound address decision and explain it for a developer:

**Address:** {address}
**Family:** {family}
**Normalized:** {normalized}
**Verdict:** {verdict}
**Matched Category:** {category}
**Matched Network:** {network}
**Embedded IPv4:** {embedded}

Please provide:
1. Why the address was allowed or blocked
2. Whether the input looks like an attempt to bypass validation (alternate encodings, mapped addresses)
3. What the caller should do next

Keep the note short and concrete."""

    async def run(self):
        """Run the MCP server."""
        logging.basicConfig(
            level=getattr(logging, self.settings.log_level.upper()),
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        logger.info("Starting MCP SSRF Guard server")

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=SERVER_VERSION,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={},
                    ),
                ),
            )


def main():
    """Main entry point."""
    server = MCPSSRFGuardServer()
    try:
        asyncio.run(server.run())
    except KeyboardInterrupt:
        logger.info("Shutting down server")
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
