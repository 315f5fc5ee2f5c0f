import os
from typing import List, Optional
from dotenv import load_dotenv

load_dotenv()

class Settings:
    def __init__(self):
        self.discord_token = os.getenv("DISCORD_TOKEN")
        self.api_key = os.getenv("API_KEY") or None
        self.allowed_guilds = self._parse_ids(os.getenv("ALLOWED_GUILDS", ""))
        self.allowed_channels = self._parse_ids(os.getenv("ALLOWED_CHANNELS", ""))
        self.allowed_origins = self._parse_list(os.getenv("ALLOWED_ORIGINS", ""))
        self.api_host = os.getenv("API_HOST", "0.0.0.0")
        self.api_port = int(os.getenv("API_PORT", "8000"))
        self.min_request_interval = int(os.getenv("MIN_REQUEST_INTERVAL_MS", "100")) / 1000
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    def _parse_ids(self, ids_string: str) -> List[int]:
        if not ids_string:
            return []
        return [int(id_str.strip()) for id_str in ids_string.split(",") if id_str.strip()]

    def _parse_list(self, list_string: str) -> List[str]:
        """Parse comma-separated string list"""
        if not list_string:
            return []
        return [item.strip() for item in list_string.split(",") if item.strip()]

    @property
    def auth_enabled(self) -> bool:
        return self.api_key is not None

    def require_token(self) -> Optional[str]:
        """Return the Discord token, or None when it is not configured"""
        token = (self.discord_token or "").strip()
        return token or None

# Global settings instance
settings = Settings()
