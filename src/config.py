"""
Productivity Dashboard — Centralized configuration.

Loads all settings from .env and validates them.
Timer delays, limits and the chat transport selection live here.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

# Load .env from project root (two levels up from src/config.py)
_ENV_PATH = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_ENV_PATH)


class Settings(BaseModel):
    """Application settings loaded from environment variables."""

    # Local timezone used for "today", "tomorrow" and recency buckets
    TIMEZONE: str = "UTC"

    # Chat simulation delays (seconds)
    MESSAGE_SENT_DELAY_SECONDS: float = 1.0
    ASSISTANT_REPLY_DELAY_SECONDS: float = 2.0

    # Notes editor
    AUTOSAVE_DELAY_SECONDS: float = 2.0
    NOTE_PREVIEW_LENGTH: int = 120

    # Chat input limit (characters)
    MAX_MESSAGE_LENGTH: int = 2000

    # Chat transport: "simulated" | "telegram"
    CHAT_TRANSPORT: str = "simulated"

    # Telegram (only needed when CHAT_TRANSPORT=telegram)
    TELEGRAM_BOT_TOKEN: str = ""
    TELEGRAM_CHAT_ID: int = 0

    @field_validator(
        "MESSAGE_SENT_DELAY_SECONDS",
        "ASSISTANT_REPLY_DELAY_SECONDS",
        "AUTOSAVE_DELAY_SECONDS",
        mode="before",
    )
    @classmethod
    def parse_delay(cls, v: str | float) -> float:
        delay = float(v)
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")
        return delay

    @field_validator("TELEGRAM_CHAT_ID", mode="before")
    @classmethod
    def parse_chat_id(cls, v: str | int) -> int:
        if isinstance(v, str) and not v.strip():
            return 0
        return int(v)


def _load_settings() -> Settings:
    """Load settings from environment, validating transport credentials."""
    transport = os.getenv("CHAT_TRANSPORT", "simulated")
    token = os.getenv("TELEGRAM_BOT_TOKEN", "")

    if transport.lower() == "telegram" and (not token or token.startswith("your-")):
        print("ERROR: TELEGRAM_BOT_TOKEN is missing or not set in .env", file=sys.stderr)
        sys.exit(1)

    return Settings(
        TIMEZONE=os.getenv("TIMEZONE", "UTC"),
        MESSAGE_SENT_DELAY_SECONDS=os.getenv("MESSAGE_SENT_DELAY_SECONDS", "1.0"),
        ASSISTANT_REPLY_DELAY_SECONDS=os.getenv("ASSISTANT_REPLY_DELAY_SECONDS", "2.0"),
        AUTOSAVE_DELAY_SECONDS=os.getenv("AUTOSAVE_DELAY_SECONDS", "2.0"),
        NOTE_PREVIEW_LENGTH=os.getenv("NOTE_PREVIEW_LENGTH", "120"),
        MAX_MESSAGE_LENGTH=os.getenv("MAX_MESSAGE_LENGTH", "2000"),
        CHAT_TRANSPORT=transport,
        TELEGRAM_BOT_TOKEN=token,
        TELEGRAM_CHAT_ID=os.getenv("TELEGRAM_CHAT_ID", ""),
    )


# Singleton, imported by all other modules as:
#   from src.config import settings
settings = _load_settings()
