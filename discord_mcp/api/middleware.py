from fastapi import HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.security import HTTPAuthorizationCredentials
from typing import Optional
import logging
import secrets

from ..config.settings import settings

logger = logging.getLogger(__name__)

class MiddlewareSetup:
    def __init__(self, app):
        self.app = app
        self._setup_cors()
        self._setup_request_logging()

    def _setup_cors(self):
        """Setup CORS middleware with optional origin restrictions"""
        allowed_origins = settings.allowed_origins if settings.allowed_origins else ["*"]

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _setup_request_logging(self):
        @self.app.middleware("http")
        async def request_logging_middleware(request: Request, call_next):
            if request.url.path == "/mcp" and request.method == "POST":
                client = request.client.host if request.client else "unknown"
                logger.debug(f"MCP request from {client}")

            response = await call_next(request)
            return response

def verify_api_key(credentials: Optional[HTTPAuthorizationCredentials], api_key: Optional[str] = None) -> None:
    """Check the bearer token against the configured API key; no-op when auth is disabled"""
    if api_key is None:
        if not settings.auth_enabled:
            return
        api_key = settings.api_key
    if not api_key:
        return

    if not credentials or not credentials.credentials:
        raise HTTPException(status_code=401, detail="API key required")

    if not secrets.compare_digest(credentials.credentials, api_key):
        raise HTTPException(status_code=401, detail="Invalid API key")
