"""Policy constants and environment-driven settings."""

import os
from dataclasses import dataclass

# No tempo or meter detection exists; every sheet carries these placeholders.
TEMPO_PLACEHOLDER = "100 BPM"
TIME_SIGNATURE_PLACEHOLDER = "4/4"

# A key detected from the finished body wins over the key the site declares.
PREFER_DETECTED_KEY = True

FETCH_TIMEOUT = 15
WEBHOOK_TIMEOUT = 10


@dataclass
class Settings:
    """Runtime settings for the HTTP proxy."""

    webhook_url: str = ""
    webhook_timeout: float = WEBHOOK_TIMEOUT
    fetch_timeout: float = FETCH_TIMEOUT
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            webhook_url=os.getenv("WEBHOOK_URL", ""),
            webhook_timeout=float(os.getenv("WEBHOOK_TIMEOUT", str(WEBHOOK_TIMEOUT))),
            fetch_timeout=float(os.getenv("FETCH_TIMEOUT", str(FETCH_TIMEOUT))),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
