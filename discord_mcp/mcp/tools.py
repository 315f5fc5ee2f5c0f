"""
MCP Tool Definitions.
Defines all available tools for the MCP protocol.
"""
from ..models.discord_models import (
    GenerateReportArgs, ListChannelsArgs, ListGuildsArgs, ReadMessagesArgs, SearchMessagesArgs
)

LIMIT_SCHEMA = {
    "type": "integer",
    "description": "Number of messages to fetch (1-100, default 50)",
    "minimum": 1,
    "maximum": 100,
    "default": 50
}

MCP_TOOLS = [
    {
        "name": "list_guilds",
        "description": "List all Discord servers/guilds the user is a member of",
        "inputSchema": {
            "type": "object",
            "properties": {},
            "required": []
        }
    },
    {
        "name": "list_channels",
        "description": "List all text channels in a Discord server/guild",
        "inputSchema": {
            "type": "object",
            "properties": {
                "guildId": {"type": "string", "description": "The ID of the Discord server/guild"}
            },
            "required": ["guildId"]
        }
    },
    {
        "name": "read_messages",
        "description": "Read recent messages from a Discord channel",
        "inputSchema": {
            "type": "object",
            "properties": {
                "channelId": {"type": "string", "description": "The ID of the channel to read messages from"},
                "limit": LIMIT_SCHEMA
            },
            "required": ["channelId"]
        }
    },
    {
        "name": "search_messages",
        "description": "Search messages in a Discord channel with filters",
        "inputSchema": {
            "type": "object",
            "properties": {
                "channelId": {"type": "string", "description": "The ID of the channel to search"},
                "query": {"type": "string", "description": "Text to search for in messages"},
                "authorId": {"type": "string", "description": "Filter by author ID"},
                "before": {"type": "string", "description": "Get messages before this message ID"},
                "after": {"type": "string", "description": "Get messages after this message ID"},
                "limit": LIMIT_SCHEMA
            },
            "required": ["channelId"]
        }
    },
    {
        "name": "generate_report",
        "description": "Generate a markdown report analyzing messages from a channel about a specific topic",
        "inputSchema": {
            "type": "object",
            "properties": {
                "channelId": {"type": "string", "description": "The ID of the channel to analyze"},
                "topic": {"type": "string", "description": "The topic or question to analyze from the messages"},
                "limit": {**LIMIT_SCHEMA, "description": "Number of messages to analyze (1-100, default 50)"}
            },
            "required": ["channelId", "topic"]
        }
    }
]

# Argument model used to validate each tool's input
TOOL_ARGUMENTS = {
    "list_guilds": ListGuildsArgs,
    "list_channels": ListChannelsArgs,
    "read_messages": ReadMessagesArgs,
    "search_messages": SearchMessagesArgs,
    "generate_report": GenerateReportArgs,
}


# Server info for MCP initialize response
MCP_SERVER_INFO = {
    "name": "discord-mcp",
    "version": "1.0.0"
}

MCP_PROTOCOL_VERSION = "2024-11-05"
