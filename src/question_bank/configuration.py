

import logging
import os
from pathlib import Path
from typing import Optional
from pydantic import BaseModel
from dotenv import load_dotenv

# Load environment variables from .env file, if present
_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(_ROOT / ".env")

def _first(*keys: str) -> Optional[str]:
    """
    Return the value of the first environment variable found in keys.
    """
    for key in keys:
        val = os.getenv(key)
        if val:
            return val
    return None

def _int_env(key: str, default: int) -> int:
    try:
        return int(os.getenv(key, default))
    except (TypeError, ValueError):
        return default

class Settings(BaseModel):
    llm_provider: str = os.getenv("LLM_PROVIDER", "openai").lower()
    llm_model: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    llm_temperature: float = float(os.getenv("LLM_TEMPERATURE", "0.3"))
    openai_api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    google_api_key: Optional[str] = _first("GOOGLE_API_KEY", "GEMINI_API_KEY")
    db_path: str = os.getenv("QUESTION_BANK_DB", "question_bank.db")
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()
    debug: bool = os.getenv("DEBUG", "false").lower() in ("1", "true", "yes")

    # PDF processing limits
    outline_max_pages: int = _int_env("OUTLINE_MAX_PAGES", 25)
    full_text_max_pages: int = _int_env("FULL_TEXT_MAX_PAGES", 20)
    page_content_max_pages: int = _int_env("PAGE_CONTENT_MAX_PAGES", 10)
    min_content_chars: int = _int_env("MIN_CONTENT_CHARS", 50)


# Singleton instance for app-wide settings
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the package logger once."""
    pkg_logger = logging.getLogger("question_bank")
    pkg_logger.setLevel("DEBUG" if settings.debug else (level or settings.log_level))
    if pkg_logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    )
    pkg_logger.addHandler(handler)
