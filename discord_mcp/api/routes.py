from fastapi import HTTPException, Request, Response, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Optional
import logging
import json

from .middleware import verify_api_key

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches verify_api_key when auth is disabled
bearer = HTTPBearer(auto_error=False)

class APIRoutes:
    def __init__(self, app, discord_bot, mcp_handler, api_key: Optional[str] = None):
        self.app = app
        self.discord_bot = discord_bot
        self.mcp_handler = mcp_handler
        self.api_key = api_key
        self._setup_routes()

    def _setup_routes(self):
        @self.app.get("/", summary="Health check")
        async def root():
            return {
                "service": "Discord MCP Server",
                "status": "running",
                "bot_ready": self.discord_bot.is_ready(),
                "guilds": self.discord_bot.guild_count,
            }

        @self.app.get("/health", summary="Health check for monitoring")
        async def health_check():
            """Simple health check that doesn't require auth"""
            return {
                "status": "ok",
                "bot_ready": self.discord_bot.is_ready()
            }

        @self.app.post("/mcp", summary="MCP Protocol Handler")
        async def mcp_handler(
            request: Request,
            credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer)
        ):
            """Handle MCP JSON-RPC requests"""
            verify_api_key(credentials, self.api_key)

            try:
                mcp_request = await request.json()
            except ValueError:
                return Response(
                    content=json.dumps({
                        "jsonrpc": "2.0",
                        "id": None,
                        "error": {"code": -32700, "message": "Parse error"}
                    }),
                    status_code=200,
                    media_type="application/json"
                )

            if not isinstance(mcp_request, dict):
                raise HTTPException(status_code=400, detail="Expected a JSON-RPC object")

            try:
                logger.info(f"MCP request: {mcp_request.get('method', 'unknown')}")
                response_data = await self.mcp_handler.handle_request(mcp_request)

                # Notifications carry no id
                if "id" not in mcp_request or mcp_request.get("method") == "notifications/initialized":
                    return Response(
                        content=json.dumps(response_data),
                        status_code=202,
                        media_type="application/json"
                    )

                return response_data

            except Exception as e:
                logger.error(f"MCP handler error: {e}")
                error_response = {
                    "jsonrpc": "2.0",
                    "id": mcp_request.get("id"),
                    "error": {"code": -32603, "message": str(e)}
                }
                return Response(
                    content=json.dumps(error_response),
                    status_code=200,  # JSON-RPC errors still use 200
                    media_type="application/json"
                )
