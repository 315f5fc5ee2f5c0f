from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional

MAX_MESSAGE_LIMIT = 100
DEFAULT_MESSAGE_LIMIT = 50


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, as exposed to MCP clients"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class GuildInfo(CamelModel):
    id: str
    name: str
    member_count: Optional[int] = None

class ChannelInfo(CamelModel):
    id: str
    name: str
    type: str

class MessageInfo(CamelModel):
    id: str
    author: str
    author_id: str
    content: str
    timestamp: str
    attachments: List[str] = Field(default_factory=list)


def clamp_limit(limit: Optional[int]) -> int:
    """Clamp a requested message count to [1, MAX_MESSAGE_LIMIT]"""
    if limit is None:
        return DEFAULT_MESSAGE_LIMIT
    return max(1, min(int(limit), MAX_MESSAGE_LIMIT))


class SearchCriteria(BaseModel):
    query: Optional[str] = None
    author_id: Optional[str] = None
    before: Optional[str] = None
    after: Optional[str] = None
    limit: int = DEFAULT_MESSAGE_LIMIT

    @property
    def effective_limit(self) -> int:
        return clamp_limit(self.limit)

    @property
    def has_filters(self) -> bool:
        return bool(self.query) or bool(self.author_id)


# ========== Tool arguments ==========

class ToolArguments(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

class ListGuildsArgs(ToolArguments):
    pass

class ListChannelsArgs(ToolArguments):
    guild_id: str = Field(description="The ID of the Discord server/guild")

class ReadMessagesArgs(ToolArguments):
    channel_id: str = Field(description="The ID of the channel to read messages from")
    limit: int = Field(DEFAULT_MESSAGE_LIMIT, ge=1, le=MAX_MESSAGE_LIMIT)

class SearchMessagesArgs(ToolArguments):
    channel_id: str = Field(description="The ID of the channel to search")
    query: Optional[str] = None
    author_id: Optional[str] = None
    before: Optional[str] = None
    after: Optional[str] = None
    limit: int = Field(DEFAULT_MESSAGE_LIMIT, ge=1, le=MAX_MESSAGE_LIMIT)

    def to_criteria(self) -> SearchCriteria:
        return SearchCriteria(
            query=self.query,
            author_id=self.author_id,
            before=self.before,
            after=self.after,
            limit=self.limit
        )

class GenerateReportArgs(ToolArguments):
    channel_id: str
    topic: str
    limit: int = Field(DEFAULT_MESSAGE_LIMIT, ge=1, le=MAX_MESSAGE_LIMIT)
