"""
Message search strategies.

native_search asks Discord's guild search endpoint; history_search scans the
channel history and filters client-side. DiscordBot.search_messages tries the
first and falls back to the second.
"""
import logging
from typing import List, Optional

import discord
from discord.http import Route

from ..models.discord_models import MAX_MESSAGE_LIMIT, MessageInfo, SearchCriteria
from .errors import PermissionDeniedError, ToolValidationError, UpstreamError
from .formatters import format_message, format_raw_messages

logger = logging.getLogger(__name__)


def _snowflake(value: Optional[str], field: str) -> Optional[discord.Object]:
    if not value:
        return None
    try:
        return discord.Object(id=int(value))
    except ValueError:
        raise ToolValidationError(f"Invalid {field} message ID: {value}")


def build_search_params(channel_id: str, criteria: SearchCriteria) -> dict:
    """Query parameters for the guild search endpoint. The accepted field set is undocumented."""
    params = {"channel_id": channel_id}
    if criteria.query:
        params["content"] = criteria.query
    if criteria.author_id:
        params["author_id"] = criteria.author_id
    if criteria.before:
        params["max_id"] = criteria.before
    if criteria.after:
        params["min_id"] = criteria.after
    return params


async def native_search(http: discord.http.HTTPClient, guild_id: int, channel_id: str,
                        criteria: SearchCriteria) -> List[MessageInfo]:
    route = Route("GET", "/guilds/{guild_id}/messages/search", guild_id=guild_id)
    data = await http.request(route, params=build_search_params(channel_id, criteria))

    # {"total_results": n, "messages": [[{...}], [{...}]]}
    if isinstance(data, dict):
        raw_messages = data.get("messages") or []
    else:
        raw_messages = data or []
    return format_raw_messages(raw_messages, criteria.effective_limit)


def matches_criteria(message: discord.Message, criteria: SearchCriteria) -> bool:
    if criteria.query and criteria.query.lower() not in message.content.lower():
        return False
    if criteria.author_id and str(message.author.id) != criteria.author_id:
        return False
    return True


async def history_search(channel: discord.abc.Messageable, criteria: SearchCriteria) -> List[MessageInfo]:
    """Scan the channel history between before/after and filter client-side

    Without filters the scan is limited to the requested count; with filters
    the whole MAX_MESSAGE_LIMIT window is scanned so matches are not cut off
    by the fetch size. An `after` bound without `before` reads forward from
    the bound, so the messages right after it are found. Results are
    newest-first.
    """
    limit = criteria.effective_limit
    fetch_limit = MAX_MESSAGE_LIMIT if criteria.has_filters else limit
    before = _snowflake(criteria.before, "before")
    after = _snowflake(criteria.after, "after")
    oldest_first = after is not None and before is None

    messages = []
    try:
        async for message in channel.history(limit=fetch_limit, before=before, after=after, oldest_first=oldest_first):
            if matches_criteria(message, criteria):
                messages.append(format_message(message))
                if len(messages) >= limit:
                    break
    except discord.Forbidden as e:
        raise PermissionDeniedError(f"No permission to read history of channel {channel.id}: {e}")
    except discord.HTTPException as e:
        raise UpstreamError(f"Message search failed for channel {channel.id}: {e}")

    if oldest_first:
        messages.reverse()
    return messages
