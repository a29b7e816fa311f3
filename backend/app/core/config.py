# app/core/config.py
from __future__ import annotations
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field

# Resolve the .env alongside the backend package root (adjust if your layout differs)
ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
BACKEND_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):

    # --- Database ---
    DATABASE_URL: str = Field(..., description="Full database URL (e.g., postgresql+psycopg://... or sqlite:///...)")

    # --- App info ---
    APP_NAME: str = Field(default="Huntorix Backend")
    PUBLIC_BASE_URL: str = Field(default="http://localhost:8000", description="Base URL used when building links in emails and storage URLs")
    CORS_ORIGINS: list[str] = Field(
        default=[
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
    )

    # --- Auth ---
    SECRET_KEY: str = Field(default="change-me-in-production", description="HMAC key for access and verification tokens")
    JWT_ALGORITHM: str = Field(default="HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default=60 * 24 * 7)
    VERIFICATION_TOKEN_EXPIRE_HOURS: int = Field(default=24 * 7)

    # --- Storage ---
    STORAGE_DIR: Path = Field(default=BACKEND_ROOT / "data" / "storage")
    MAX_UPLOAD_BYTES: int = Field(default=16 * 1024 * 1024)

    # --- AI Models & Services ---
    OLLAMA_BASE_URL: str | None = Field(default=None, description="Base URL of local Ollama server")
    LLM_CHAT_MODEL: str | None = Field(default=None, description="Ollama model used for structured extraction")
    OPENAI_API_KEY: str | None = Field(default=None, description="API key for OpenAI (or any OpenAI-compatible gateway)")
    OPENAI_MODEL: str | None = Field(default=None, description="Default OpenAI model for chat/completions")
    AI_GATEWAY_URL: str = Field(
        default="https://api.openai.com/v1/chat/completions",
        description="OpenAI-compatible chat completions endpoint used for the streamed assistant",
    )
    ASSISTANT_MODEL: str = Field(default="gpt-4o-mini")

    # --- Email ---
    SMTP_HOST: str | None = Field(default=None, description="SMTP server; when unset emails are only logged")
    SMTP_PORT: int = Field(default=587)
    SMTP_USER: str | None = None
    SMTP_PASSWORD: str | None = None
    EMAIL_FROM: str = Field(default="Huntorix <no-reply@huntorix.com>")

    # --- Realtime & workers ---
    REALTIME_THROTTLE_SECONDS: float = Field(default=0.3)
    REMINDER_INTERVAL_SECONDS: int = Field(default=60 * 60)

    class Config:
        env_file = str(ENV_PATH)
        case_sensitive = True

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


settings = Settings()
