"""
Formatting utilities for Discord objects.
Projects discord.py objects and raw API payloads into the records returned by the tools.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import discord

from ..models.discord_models import ChannelInfo, GuildInfo, MessageInfo


def format_guild(guild: discord.Guild) -> GuildInfo:
    return GuildInfo(
        id=str(guild.id),
        name=guild.name,
        member_count=guild.member_count
    )


def format_channel(channel: discord.abc.GuildChannel) -> ChannelInfo:
    """Format a Discord guild channel; type is the platform's channel type tag"""
    return ChannelInfo(
        id=str(channel.id),
        name=getattr(channel, "name", None) or "Unknown",
        type=str(channel.type)
    )


def format_message(message: discord.Message) -> MessageInfo:
    """Format a Discord message, keeping attachment URLs in upload order"""
    return MessageInfo(
        id=str(message.id),
        author=message.author.display_name,
        author_id=str(message.author.id),
        content=message.content,
        timestamp=message.created_at.isoformat(),
        attachments=[att.url for att in message.attachments]
    )


def unwrap_search_entry(entry: Any) -> Optional[Dict[str, Any]]:
    """Search results wrap each hit in a one-element list; return the bare payload"""
    if isinstance(entry, list):
        return entry[0] if entry else None
    return entry


def format_raw_message(payload: Dict[str, Any]) -> MessageInfo:
    """Format a raw message payload from the HTTP API

    Args:
        payload: Message object as returned by the search endpoint
    """
    author = payload.get("author") or {}
    timestamp = payload.get("timestamp") or datetime.now(timezone.utc).isoformat()

    return MessageInfo(
        id=str(payload["id"]),
        author=author.get("global_name") or author.get("username") or "Unknown",
        author_id=str(author.get("id", "")),
        content=payload.get("content") or "",
        timestamp=timestamp,
        attachments=[att["url"] for att in payload.get("attachments") or [] if att.get("url")]
    )


def format_raw_messages(raw_messages: List[Any], limit: int) -> List[MessageInfo]:
    """Unwrap, truncate to limit and format a raw search result list"""
    payloads = [unwrap_search_entry(entry) for entry in raw_messages]
    payloads = [payload for payload in payloads if payload]
    return [format_raw_message(payload) for payload in payloads[:limit]]
