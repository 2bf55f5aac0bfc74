import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_SERVICE_URL = "http://localhost/phylows/ubio/"

ENRICHMENT_ABORT = "abort"
ENRICHMENT_DEGRADE = "degrade"


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


@dataclass
class Settings:
    """
    Deployment settings for the service.

    `api_key` is the uBio keyCode. It may be empty: record lookups and
    redirects work without it, only queries need it.
    """

    service_url: str = DEFAULT_SERVICE_URL
    api_key: str = ""
    timeout: float = 15.0
    max_retries: int = 3
    retry_base_delay: float = 1.0
    max_workers: int = 1
    on_enrichment_error: str = ENRICHMENT_ABORT
    log_level: str = "INFO"
    log_dir: Path = Path("logs")

    def __post_init__(self):
        if self.on_enrichment_error not in (ENRICHMENT_ABORT, ENRICHMENT_DEGRADE):
            raise ValueError(
                f"on_enrichment_error must be '{ENRICHMENT_ABORT}' or "
                f"'{ENRICHMENT_DEGRADE}', got '{self.on_enrichment_error}'"
            )
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            service_url=os.getenv("UBIOWS_URL", DEFAULT_SERVICE_URL),
            api_key=os.getenv("UBIO_KEYCODE", ""),
            timeout=float(os.getenv("UBIOWS_TIMEOUT", "15")),
            max_retries=int(os.getenv("UBIOWS_MAX_RETRIES", "3")),
            max_workers=int(os.getenv("UBIOWS_MAX_WORKERS", "1")),
            on_enrichment_error=os.getenv("UBIOWS_ON_ENRICHMENT_ERROR", ENRICHMENT_ABORT),
            log_level=os.getenv("UBIOWS_LOG_LEVEL", "INFO"),
            log_dir=Path(os.getenv("UBIOWS_LOG_DIR", "logs")),
        )
