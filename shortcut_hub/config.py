from __future__ import annotations

import os
from dotenv import load_dotenv
from pydantic import BaseModel

# Load environment variables from .env (if present)
load_dotenv()


class Settings(BaseModel):
    # Bind address of the local backend
    host: str = os.getenv("SHORTCUT_HUB_HOST", "127.0.0.1")
    port: int = int(os.getenv("SHORTCUT_HUB_PORT", "3001"))

    # API key for this FastAPI server (sent via X-API-Key header)
    api_key: str = os.getenv("SHORTCUT_HUB_API_KEY", "")

    # CORS origins (comma-separated or "*")
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    # Flat file holding the saved shortcut list
    shortcuts_file: str = os.getenv("SHORTCUTS_FILE", "shortcuts.yml")

    # Wall-clock budget for one launched command
    execution_timeout_ms: int = int(os.getenv("EXECUTION_TIMEOUT_MS", "30000"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
