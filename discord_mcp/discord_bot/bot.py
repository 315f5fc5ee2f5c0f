import discord
import logging
from typing import List, Optional

from ..config.settings import settings
from ..models.discord_models import (
    DEFAULT_MESSAGE_LIMIT, ChannelInfo, GuildInfo, MessageInfo, SearchCriteria, clamp_limit
)
from ..utils.rate_limiter import RateLimiter
from .access import AccessChecker, is_text_channel
from .errors import MissingContextError, NotFoundError, PermissionDeniedError, UpstreamError
from .formatters import format_channel, format_guild, format_message
from .search import history_search, native_search

logger = logging.getLogger(__name__)


def _parse_id(value) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


class DiscordBot:
    """Read-only adapter over a discord.py client session.

    The client is injected so tests can pass a fake; by default a new
    discord.Client with message content intents is created.
    """

    def __init__(self, client: Optional[discord.Client] = None,
                 rate_limiter: Optional[RateLimiter] = None,
                 access: Optional[AccessChecker] = None):
        if client is None:
            intents = discord.Intents.default()
            intents.message_content = True
            intents.guilds = True
            intents.guild_messages = True
            client = discord.Client(intents=intents)
            self._setup_events(client)

        self.client = client
        self.rate_limiter = rate_limiter or RateLimiter(settings.min_request_interval)
        self.access = access or AccessChecker(client)

    def _setup_events(self, client: discord.Client):
        @client.event
        async def on_ready():
            logger.info(f'{client.user} has connected to Discord!')
            logger.info(f'Bot is in {len(client.guilds)} guilds')

    async def login(self, token: Optional[str] = None):
        """Authenticate the session; raises discord.LoginFailure on a bad token"""
        await self.client.login(token or settings.discord_token)

    async def connect(self):
        """Run the gateway connection until the session is closed"""
        await self.client.connect()

    async def close(self):
        await self.client.close()

    async def wait_until_ready(self):
        await self.client.wait_until_ready()

    def is_ready(self) -> bool:
        """Check if bot is ready"""
        return self.client.is_ready()

    @property
    def guild_count(self) -> int:
        """Get number of guilds bot is in"""
        return len(self.client.guilds) if self.client.is_ready() else 0

    # ========== Lookups ==========

    def _get_guild(self, guild_id: str) -> discord.Guild:
        parsed = _parse_id(guild_id)
        guild = self.client.get_guild(parsed) if parsed is not None else None
        if guild is None or not self.access.is_guild_allowed(guild.id):
            raise NotFoundError(f"Guild not found: {guild_id}")
        return guild

    def _get_channel(self, channel_id: str):
        parsed = _parse_id(channel_id)
        return self.client.get_channel(parsed) if parsed is not None else None

    def get_guild_name(self, guild_id: str) -> Optional[str]:
        """Guild name from the cache, or None; never raises"""
        parsed = _parse_id(guild_id)
        guild = self.client.get_guild(parsed) if parsed is not None else None
        return guild.name if guild is not None else None

    def get_channel_name(self, channel_id: str) -> Optional[str]:
        """Channel name from the cache, or None; never raises"""
        channel = self._get_channel(channel_id)
        return getattr(channel, "name", None) if channel is not None else None

    # ========== Operations ==========

    async def list_guilds(self) -> List[GuildInfo]:
        """List the guilds held in the session cache"""
        await self.rate_limiter.wait()

        return [
            format_guild(guild)
            for guild in self.client.guilds
            if self.access.is_guild_allowed(guild.id)
        ]

    async def list_channels(self, guild_id: str) -> List[ChannelInfo]:
        """List text channels and active threads of a guild that the bot can view"""
        await self.rate_limiter.wait()

        guild = self._get_guild(guild_id)

        return [
            format_channel(channel)
            for channel in [*guild.channels, *guild.threads]
            if is_text_channel(channel) and self.access.can_view(channel)
        ]

    async def read_messages(self, channel_id: str, limit: int = DEFAULT_MESSAGE_LIMIT) -> List[MessageInfo]:
        """Get the most recent messages from a channel, newest first"""
        await self.rate_limiter.wait()

        channel = self._get_channel(channel_id)
        if channel is None or not is_text_channel(channel):
            raise NotFoundError(f"Text channel not found: {channel_id}")

        self.access.ensure_can_read(channel, channel_id)

        messages = []
        try:
            async for message in channel.history(limit=clamp_limit(limit)):
                messages.append(format_message(message))
        except discord.Forbidden as e:
            raise PermissionDeniedError(f"No permission to read channel {channel_id}: {e}")
        except discord.HTTPException as e:
            raise UpstreamError(f"Failed to fetch messages from channel {channel_id}: {e}")

        return messages

    async def search_messages(self, channel_id: str, criteria: Optional[SearchCriteria] = None) -> List[MessageInfo]:
        """Search a channel, using Discord search first and a history scan as fallback"""
        await self.rate_limiter.wait()
        criteria = criteria or SearchCriteria()

        channel = self._get_channel(channel_id)
        if channel is None or not is_text_channel(channel):
            raise NotFoundError(f"Text channel or thread not found: {channel_id}")

        self.access.ensure_can_read(channel, channel_id)

        guild = getattr(channel, "guild", None)
        if guild is None:
            raise MissingContextError(f"Guild context not found for channel: {channel_id}")

        try:
            return await native_search(self.client.http, guild.id, str(channel.id), criteria)
        except Exception as e:
            logger.warning(f"Native search failed for channel {channel_id}: {e}. Falling back to history scan.")

        return await history_search(channel, criteria)
