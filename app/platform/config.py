from pathlib import Path
from typing import Literal, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── App ─────────────────────────────────────
    APP_NAME: str = "Accessibility Checker"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    DEBUG: bool = True

    # ── Database ────────────────────────────────
    DATABASE_URL: str = "sqlite+aiosqlite:///./accessibility_checks.db"
    HISTORY_LIMIT: int = 50

    # ── Browser ─────────────────────────────────
    CHROMEDRIVER_PATH: Optional[str] = None
    PAGE_LOAD_TIMEOUT: int = 30  # seconds, navigation ceiling
    SCRIPT_TIMEOUT: int = 60  # seconds, axe.run can be slow on large pages
    WINDOW_WIDTH: int = 1920
    WINDOW_HEIGHT: int = 1080

    # ── Rule engine (axe-core) ──────────────────
    AXE_CORE_PATH: Optional[str] = None  # local axe.min.js instead of the packaged copy

    # ── Markup validator (W3C Nu) ───────────────
    HTML_VALIDATOR_URL: str = "https://validator.w3.org/nu/?out=json"
    HTML_VALIDATOR_TIMEOUT: float = 30.0
    HTML_VALIDATOR_USER_AGENT: str = "Accessibility-Checker/1.0"

    class Config:
        env_file = str(Path(__file__).parent.parent.parent / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


settings = Settings()
