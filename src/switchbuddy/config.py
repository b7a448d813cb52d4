# src/switchbuddy/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

- One Settings object for the whole app.
- No secrets required at import time (LLM / Telegram keys are optional).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

ENV_PREFIX = "SB"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    return [p.strip() for p in raw.replace(",", " ").split() if p.strip()]


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Identity ----
    user_id: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- LLM (OpenAI-compatible endpoint) ----
    llm_api_key: Optional[str]
    llm_base_url: str
    llm_models: List[str]
    llm_connect_timeout: float
    llm_read_timeout: float

    # ---- Debrief senders ----
    telegram_bot_token: Optional[str]
    telegram_chat_id: Optional[str]
    whatsapp_webhook_url: Optional[str]
    whatsapp_recipient: Optional[str]

    # ---- Debrief scheduler ----
    debrief_enabled: bool
    debrief_hour: int
    debrief_minute: int
    debrief_interval_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    tasks_db_path: Path
    rewards_db_path: Path
    jobs_db_path: Path
    career_db_path: Path
    debrief_state_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "SwitchBuddy")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        user_id = (_first_env(_k("USER_ID"), default="local") or "local").strip()

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        # GEMINI_API_KEY is accepted so an existing Gemini setup works unchanged.
        llm_api_key = _first_env(_k("LLM_API_KEY"), "GEMINI_API_KEY", default=None)
        llm_base_url = _env(
            _k("LLM_BASE_URL"), "https://generativelanguage.googleapis.com/v1beta/openai/"
        )
        llm_models = _env_list(_k("LLM_MODELS"), ["gemini-2.5-pro", "gemini-2.5-flash"])
        llm_connect_timeout = _env_float(_k("LLM_CONNECT_TIMEOUT_SECONDS"), 5.0)
        llm_read_timeout = _env_float(_k("LLM_READ_TIMEOUT_SECONDS"), 60.0)

        telegram_bot_token = _first_env(_k("TELEGRAM_BOT_TOKEN"), default=None)
        telegram_chat_id = _first_env(_k("TELEGRAM_CHAT_ID"), default=None)
        whatsapp_webhook_url = _first_env(_k("WHATSAPP_WEBHOOK_URL"), default=None)
        whatsapp_recipient = _first_env(_k("WHATSAPP_RECIPIENT"), default=None)

        debrief_enabled = _env_bool(_k("DEBRIEF_ENABLED"), False)
        debrief_hour = max(0, min(23, _env_int(_k("DEBRIEF_HOUR"), 21)))
        debrief_minute = max(0, min(59, _env_int(_k("DEBRIEF_MINUTE"), 0)))
        debrief_interval_seconds = _env_float(_k("DEBRIEF_INTERVAL_SECONDS"), 60.0)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/switchbuddy"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")
        rewards_db_path = _env_path(_k("REWARDS_DB_PATH"), data_dir / "rewards.sqlite3")
        jobs_db_path = _env_path(_k("JOBS_DB_PATH"), data_dir / "jobs.sqlite3")
        career_db_path = _env_path(_k("CAREER_DB_PATH"), data_dir / "career.sqlite3")
        debrief_state_path = _env_path(_k("DEBRIEF_STATE_PATH"), data_dir / "debrief_state.json")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            user_id=user_id,
            console_enabled=console_enabled,
            llm_api_key=llm_api_key,
            llm_base_url=llm_base_url,
            llm_models=llm_models,
            llm_connect_timeout=llm_connect_timeout,
            llm_read_timeout=llm_read_timeout,
            telegram_bot_token=telegram_bot_token,
            telegram_chat_id=telegram_chat_id,
            whatsapp_webhook_url=whatsapp_webhook_url,
            whatsapp_recipient=whatsapp_recipient,
            debrief_enabled=debrief_enabled,
            debrief_hour=debrief_hour,
            debrief_minute=debrief_minute,
            debrief_interval_seconds=debrief_interval_seconds,
            data_dir=data_dir,
            tasks_db_path=tasks_db_path,
            rewards_db_path=rewards_db_path,
            jobs_db_path=jobs_db_path,
            career_db_path=career_db_path,
            debrief_state_path=debrief_state_path,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
