import logging
import os
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv

# Load .env once, at import
load_dotenv()

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    # Gemini
    GOOGLE_API_KEY: str = os.getenv("GOOGLE_API_KEY", "")
    GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
    GEMINI_TIMEOUT_MS: int = int(os.getenv("GEMINI_TIMEOUT_MS", "30000"))

    # Share links
    APP_BASE_URL: str = os.getenv("APP_BASE_URL", "http://localhost:8501")
    APP_NAME: str = os.getenv("APP_NAME", "FestaGenius")

    # Calendar links: IANA zone the party's wall-clock time refers to.
    # Empty means the zone of the running process.
    INVITE_TIMEZONE: str = os.getenv("INVITE_TIMEZONE", "")

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()


def invite_timezone(name: Optional[str] = None) -> Optional[tzinfo]:
    zone = (settings.INVITE_TIMEZONE if name is None else name).strip()
    if not zone:
        return None
    try:
        return ZoneInfo(zone)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("unknown INVITE_TIMEZONE %r, using local time", zone)
        return None


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
