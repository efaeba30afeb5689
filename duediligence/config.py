from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field


PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseModel):
    """Runtime configuration loaded from environment variables."""

    openai_api_key: str | None = Field(default=None, repr=False)
    openai_model: str = "gpt-4o-mini"
    web_search_tool: str = "web_search_preview"
    request_timeout: float = 60.0

    host: str = "0.0.0.0"
    port: int = 3000
    public_dir: Path = PACKAGE_DIR / "public"
    log_level: str = "INFO"

    class Config:
        extra = "ignore"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load .env + environment variables and return Settings singleton."""

    load_dotenv()
    return Settings(
        openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        openai_model=os.getenv("OPENAI_MODEL", "gpt-4o-mini"),
        web_search_tool=os.getenv("OPENAI_WEB_SEARCH_TOOL", "web_search_preview"),
        request_timeout=os.getenv("OPENAI_TIMEOUT", "60"),
        host=os.getenv("HOST", "0.0.0.0"),
        port=os.getenv("PORT", "3000"),
        public_dir=os.getenv("PUBLIC_DIR") or PACKAGE_DIR / "public",
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
