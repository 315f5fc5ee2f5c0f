"""
Access control utilities for Discord channels and guilds.
Handles permission checking based on configuration and Discord permissions.
"""
import discord
from typing import Iterable, Optional

from ..config.settings import settings
from .errors import PermissionDeniedError

# Channel kinds that carry a message history. TextChannel also covers news channels.
TEXT_CHANNEL_TYPES = (
    discord.TextChannel,
    discord.VoiceChannel,
    discord.StageChannel,
    discord.DMChannel,
    discord.GroupChannel,
    discord.Thread,
)


def is_text_channel(channel) -> bool:
    return isinstance(channel, TEXT_CHANNEL_TYPES)


class AccessChecker:
    """Handles access control checks for Discord resources"""

    def __init__(self, client: discord.Client,
                 allowed_guilds: Optional[Iterable[int]] = None,
                 allowed_channels: Optional[Iterable[int]] = None):
        self.client = client
        self.allowed_guilds = set(settings.allowed_guilds if allowed_guilds is None else allowed_guilds)
        self.allowed_channels = set(settings.allowed_channels if allowed_channels is None else allowed_channels)

    def is_guild_allowed(self, guild_id: int) -> bool:
        """Check if guild is in the allowed list (config-based)"""
        if self.allowed_guilds:
            return guild_id in self.allowed_guilds
        return True

    def is_channel_allowed(self, channel) -> bool:
        """Check if channel is in the allowed list; threads are checked through their parent"""
        if isinstance(channel, discord.Thread):
            if channel.parent_id is None:
                return False
            channel_id = channel.parent_id
        else:
            channel_id = channel.id

        if self.allowed_channels:
            return channel_id in self.allowed_channels

        guild = getattr(channel, "guild", None)
        if guild is not None:
            return self.is_guild_allowed(guild.id)
        return True

    def permissions_for(self, channel) -> discord.Permissions:
        """Resolve the bot's permissions in a channel"""
        guild = getattr(channel, "guild", None)
        member = guild.me if guild is not None else self.client.user
        return channel.permissions_for(member)

    def can_view(self, channel) -> bool:
        return self.is_channel_allowed(channel) and self.permissions_for(channel).view_channel

    def ensure_can_read(self, channel, channel_id: str) -> None:
        """Raise PermissionDeniedError unless the bot can view and read history in the channel"""
        if not self.is_channel_allowed(channel):
            raise PermissionDeniedError(f"Access denied to channel: {channel_id}")

        permissions = self.permissions_for(channel)
        if not permissions.view_channel:
            raise PermissionDeniedError(f"Missing VIEW_CHANNEL permission for channel: {channel_id}")
        if not permissions.read_message_history:
            raise PermissionDeniedError(f"Missing READ_MESSAGE_HISTORY permission for channel: {channel_id}")
