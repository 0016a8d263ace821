import logging
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger("claimcheck")


class Settings(BaseSettings):
    """Loads the backend settings from the environment and an optional .env file."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"

    @property
    def GEMINI_ENDPOINT(self) -> str:
        return f"{self.GEMINI_BASE_URL}/v1beta/models/{self.GEMINI_MODEL}:generateContent"


settings = Settings()

GEMINI_API_KEY = settings.GEMINI_API_KEY
GEMINI_MODEL = settings.GEMINI_MODEL
GEMINI_ENDPOINT = settings.GEMINI_ENDPOINT

from .constants import (
    LLM_CONFIG,
    RATE_LIMITS_PER_SECOND,
    RESILIENCE_CONFIG,
    VERIFICATION_CONFIG,
    MESSAGES,
)

REQUIRED_KEYS = ["GEMINI_API_KEY"]

def check_api_keys_on_startup():
    """Check for required API keys on startup."""
    missing_keys = []
    for key_name in REQUIRED_KEYS:
        if not globals().get(key_name):
            missing_keys.append(key_name)

    if missing_keys:
        logger.warning(f"Missing API keys: {', '.join(missing_keys)}. Claim verification will fail.")
    else:
        logger.info("All required API keys are configured.")

__all__ = [
    "logger",
    "settings",
    "Settings",
    "GEMINI_API_KEY",
    "GEMINI_MODEL",
    "GEMINI_ENDPOINT",
    "check_api_keys_on_startup",
    "LLM_CONFIG",
    "RATE_LIMITS_PER_SECOND",
    "RESILIENCE_CONFIG",
    "VERIFICATION_CONFIG",
    "MESSAGES",
]
