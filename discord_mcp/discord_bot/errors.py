"""
Error types raised by the Discord adapter and the MCP dispatcher.
Every one of them is converted into an error-tagged tool result at the
dispatch boundary.
"""


class DiscordMCPError(Exception):
    """Base class for all errors surfaced to MCP callers"""


class NotFoundError(DiscordMCPError):
    """A guild or channel id does not resolve"""


class PermissionDeniedError(DiscordMCPError):
    """The bot lacks view or history permission, or the resource is not allowed"""


class MissingContextError(DiscordMCPError):
    """The channel has no owning guild (e.g. a DM channel)"""


class UnknownToolError(DiscordMCPError):
    pass


class ToolValidationError(DiscordMCPError):
    pass


class UpstreamError(DiscordMCPError):
    """A Discord request failed and no fallback was available"""
