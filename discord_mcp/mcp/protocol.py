import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from ..discord_bot.errors import DiscordMCPError, ToolValidationError, UnknownToolError
from ..models.discord_models import CamelModel
from .reports import build_report
from .tools import MCP_PROTOCOL_VERSION, MCP_SERVER_INFO, MCP_TOOLS, TOOL_ARGUMENTS

logger = logging.getLogger(__name__)


def _to_json(records: List[CamelModel]) -> str:
    return json.dumps([record.to_wire() for record in records], indent=2)


def _text_result(text: str, is_error: bool = False) -> Dict[str, Any]:
    return {
        "content": [{"type": "text", "text": text}],
        "isError": is_error
    }


def _validation_message(tool_name: str, error: ValidationError) -> str:
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc']) or 'arguments'}: {err['msg']}"
        for err in error.errors()
    )
    return f"Invalid arguments for {tool_name}: {problems}"


class MCPProtocolHandler:
    def __init__(self, discord_bot):
        self.discord_bot = discord_bot
        # tool calls run one at a time
        self._call_lock = asyncio.Lock()
        self._handlers = {
            "list_guilds": self._list_guilds,
            "list_channels": self._list_channels,
            "read_messages": self._read_messages,
            "search_messages": self._search_messages,
            "generate_report": self._generate_report,
        }

    async def handle_request(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Handle incoming MCP protocol requests"""
        method = request.get("method")

        try:
            if method == "initialize":
                return self._handle_initialize(request)
            elif method == "tools/list":
                return self._handle_tools_list(request)
            elif method == "tools/call":
                return await self._handle_tools_call(request)
            elif method == "ping":
                return {"jsonrpc": "2.0", "id": request.get("id"), "result": {}}
            elif method == "notifications/initialized":
                return {}  # Just acknowledge the notification
            else:
                logger.warning(f"Unknown method: {method}")
                return {
                    "jsonrpc": "2.0",
                    "id": request.get("id"),
                    "error": {"code": -32601, "message": f"Unknown method: {method}"}
                }
        except Exception as e:
            logger.exception(f"Error handling MCP request: {e}")
            return {
                "jsonrpc": "2.0",
                "id": request.get("id"),
                "error": {"code": -32603, "message": f"Internal error: {str(e)}"}
            }

    def _handle_initialize(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Handle MCP initialize request"""
        return {
            "jsonrpc": "2.0",
            "id": request.get("id"),
            "result": {
                "protocolVersion": MCP_PROTOCOL_VERSION,
                "capabilities": {
                    "tools": {}
                },
                "serverInfo": MCP_SERVER_INFO
            }
        }

    def _handle_tools_list(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Handle MCP tools/list request"""
        return {
            "jsonrpc": "2.0",
            "id": request.get("id"),
            "result": {"tools": self.list_tools()}
        }

    async def _handle_tools_call(self, request: Dict[str, Any]) -> Dict[str, Any]:
        """Handle MCP tools/call request"""
        params = request.get("params")
        if not isinstance(params, dict) or not isinstance(params.get("name"), str):
            return {
                "jsonrpc": "2.0",
                "id": request.get("id"),
                "error": {"code": -32602, "message": "Invalid params: tools/call requires a tool name"}
            }

        result = await self.call_tool(params["name"], params.get("arguments"))
        return {
            "jsonrpc": "2.0",
            "id": request.get("id"),
            "result": result
        }

    def list_tools(self) -> List[Dict[str, Any]]:
        return MCP_TOOLS

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """Run a tool and return its result; failures come back with isError set"""
        async with self._call_lock:
            logger.info(f"Tool call: {name}")
            try:
                handler = self._handlers.get(name)
                if handler is None:
                    raise UnknownToolError(f"Unknown tool: {name}")

                try:
                    args = TOOL_ARGUMENTS[name].model_validate(arguments or {})
                except ValidationError as e:
                    raise ToolValidationError(_validation_message(name, e))

                return _text_result(await handler(args))
            except DiscordMCPError as e:
                logger.warning(f"Tool {name} failed: {e}")
                return _text_result(f"Error: {e}", is_error=True)
            except Exception as e:
                logger.exception(f"Unexpected error in tool {name}")
                return _text_result(f"Error: {e}", is_error=True)

    # ========== Tool handlers ==========

    async def _list_guilds(self, args) -> str:
        guilds = await self.discord_bot.list_guilds()
        return _to_json(guilds)

    async def _list_channels(self, args) -> str:
        channels = await self.discord_bot.list_channels(args.guild_id)
        guild_name = self.discord_bot.get_guild_name(args.guild_id)
        return f"# Channels in {guild_name or args.guild_id}\n\n{_to_json(channels)}"

    async def _read_messages(self, args) -> str:
        messages = await self.discord_bot.read_messages(args.channel_id, args.limit)
        channel_name = self.discord_bot.get_channel_name(args.channel_id)
        return f"# Messages from #{channel_name or args.channel_id}\n\n{_to_json(messages)}"

    async def _search_messages(self, args) -> str:
        messages = await self.discord_bot.search_messages(args.channel_id, args.to_criteria())
        channel_name = self.discord_bot.get_channel_name(args.channel_id)
        return (
            f"# Search Results from #{channel_name or args.channel_id}\n\n"
            f"Query: {args.query or 'N/A'}\n"
            f"Results: {len(messages)}\n\n"
            f"{_to_json(messages)}"
        )

    async def _generate_report(self, args) -> str:
        messages = await self.discord_bot.read_messages(args.channel_id, args.limit)
        channel_name = self.discord_bot.get_channel_name(args.channel_id)
        return build_report(channel_name or args.channel_id, args.topic, messages)
