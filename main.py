import asyncio
import logging
import sys
from fastapi import FastAPI
import uvicorn

from discord_mcp.discord_bot.bot import DiscordBot
from discord_mcp.mcp.protocol import MCPProtocolHandler
from discord_mcp.api.routes import APIRoutes
from discord_mcp.api.middleware import MiddlewareSetup
from discord_mcp.config.settings import settings

def resolve_log_level(name: str) -> int:
    """Numeric level for a LOG_LEVEL name; unknown names fall back to INFO"""
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO

LOG_LEVEL = resolve_log_level(settings.log_level)

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)

class DiscordMCPServer:
    def __init__(self, token: str):
        self.token = token
        self.app = FastAPI(title="Discord MCP Server", version="1.0.0")
        self.discord_bot = DiscordBot()
        self.mcp_handler = MCPProtocolHandler(self.discord_bot)

        # Setup middleware and routes
        self.middleware_setup = MiddlewareSetup(self.app)
        self.api_routes = APIRoutes(self.app, self.discord_bot, self.mcp_handler)

    async def run_api_server(self):
        """Run the FastAPI server once the Discord session is ready"""
        await self.discord_bot.wait_until_ready()
        logger.info("Discord client ready")

        config = uvicorn.Config(
            self.app,
            host=settings.api_host,
            port=settings.api_port,
            log_level=logging.getLevelName(LOG_LEVEL).lower()
        )
        server = uvicorn.Server(config)
        await server.serve()

    async def start(self):
        """Start both the Discord session and the API server"""
        logger.info("Starting Discord MCP server...")

        try:
            await self.discord_bot.login(self.token)
            await asyncio.gather(
                self.discord_bot.connect(),
                self.run_api_server()
            )
        finally:
            await self.discord_bot.close()

def main() -> int:
    token = settings.require_token()
    if not token:
        logger.error("DISCORD_TOKEN environment variable is not set")
        return 1

    try:
        asyncio.run(DiscordMCPServer(token).start())
    except KeyboardInterrupt:
        logger.info("Shutting down")
    except Exception:
        logger.exception("Fatal error")
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
