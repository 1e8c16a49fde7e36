"""Environment-backed settings for the analysis service and its client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_SERVER_URL = "http://127.0.0.1:8000"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    """Values read from the process environment (and `.env` when present).

    Attributes:
        api_key: Key for the OpenAI-compatible endpoint. None when unset.
        base_url: Base URL of the OpenAI-compatible endpoint.
        log_level: Name of the root logging level.
        server_url: Analysis API used by the command-line client.
    """

    api_key: Optional[str]
    base_url: str = DEFAULT_BASE_URL
    log_level: str = "INFO"
    server_url: str = DEFAULT_SERVER_URL

    def require_api_key(self) -> str:
        """Return the API key or raise if the environment does not provide one."""
        if not self.api_key:
            raise RuntimeError(
                "OPENROUTER_API_KEY (or OPENAI_API_KEY) environment variable is not set"
            )
        return self.api_key


def load_settings() -> Settings:
    """Load `.env` if present and build a `Settings` snapshot."""
    load_dotenv()
    api_key = os.getenv("OPENROUTER_API_KEY") or os.getenv("OPENAI_API_KEY")
    return Settings(
        api_key=api_key.strip() if api_key else None,
        base_url=os.getenv("OPENROUTER_BASE_URL", DEFAULT_BASE_URL),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        server_url=os.getenv("ANALYZER_SERVER_URL", DEFAULT_SERVER_URL),
    )


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger once for the process."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    # The HTTP stacks log every request at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
