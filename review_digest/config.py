from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()

DEFAULT_API_URL = "https://api.deepseek.com/v1/chat/completions"


def _optional(key: str) -> str | None:
    value = (os.getenv(key) or "").strip()
    return value or None


def _float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {key} must be numeric") from exc


def _int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigurationError(f"Environment variable {key} must be an integer") from exc


@dataclass(frozen=True)
class Settings:
    llm_api_key: str | None = None
    llm_api_url: str = DEFAULT_API_URL
    llm_model: str = "deepseek-chat"
    temperature: float = 0.2

    connect_timeout: float = 3.0
    request_timeout: float = 5.0
    review_limit: int = 20

    duckdb_path: str = "./data/reviews.duckdb"
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the process environment (and .env, loaded at import)."""
    return Settings(
        llm_api_key=_optional("DEEPSEEK_API_KEY"),
        llm_api_url=os.getenv("LLM_API_URL", DEFAULT_API_URL),
        llm_model=os.getenv("LLM_MODEL", "deepseek-chat"),
        temperature=_float("TEMPERATURE", 0.2),
        connect_timeout=_float("LLM_CONNECT_TIMEOUT", 3.0),
        request_timeout=_float("LLM_REQUEST_TIMEOUT", 5.0),
        review_limit=_int("REVIEW_LIMIT", 20),
        duckdb_path=os.getenv("DUCKDB_PATH", "./data/reviews.duckdb"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: str | int = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s %(levelname)s %(name)s - %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        ))
        root.addHandler(handler)


CFG = load_settings()
