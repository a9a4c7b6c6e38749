"""
Configuration from environment.
"""

import logging
import os

from pydantic import BaseModel

DEFAULT_EXTRAS_URL = "http://localhost:5100"
DEFAULT_TIMEOUT = 30
DEFAULT_USER_AGENT = "itgfetch/1.0"

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class Settings(BaseModel):
    extras_api_url: str = DEFAULT_EXTRAS_URL
    extras_api_key: str = ""
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            extras_api_url=os.getenv("EXTRAS_API_URL", DEFAULT_EXTRAS_URL),
            extras_api_key=os.getenv("EXTRAS_API_KEY", ""),
            timeout=float(os.getenv("FETCH_TIMEOUT", str(DEFAULT_TIMEOUT))),
            user_agent=os.getenv("FETCH_USER_AGENT", DEFAULT_USER_AGENT),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            host=os.getenv("HOST", "127.0.0.1"),
            port=int(os.getenv("PORT", "8000")),
        )


def configure_logging(level: str = "INFO"):
    """Set up root logging once for the CLI and the app."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
