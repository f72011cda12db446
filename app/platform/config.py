from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Concierge SMS"
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ── Logging ─────────────────────────────────
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"

    # ── Database ────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./concierge.db"
    AUTO_CREATE_TABLES: bool = True

    # ── Cache ───────────────────────────────────
    REDIS_URL: str = "redis://localhost:6379/0"

    # ── Service identity (ChittyConnect) ────────
    SERVICE_NAME: str = "chittyconcierge"
    CANONICAL_URI: str = "chittycanon://platform/services/concierge"
    CHITTYCONNECT_URL: str = "https://connect.chitty.cc"
    CREDENTIAL_CACHE_TTL_SECONDS: int = 300

    # ── Messaging provider ──────────────────────
    TWILIO_API_BASE: str = "https://api.twilio.com/2010-04-01"

    # ── LLM ─────────────────────────────────────
    LLM_API_KEY: Optional[str] = None
    OPENROUTER_API_KEY: Optional[str] = None
    LLM_BASE_URL: str = "https://openrouter.ai/api/v1"
    LLM_MODEL: str = "meta-llama/llama-3.1-8b-instruct"

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    @property
    def llm_api_key(self) -> Optional[str]:
        return self.LLM_API_KEY or self.OPENROUTER_API_KEY


settings = Settings()
