from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .errors import KeywordTableError
from .types import KeywordTable

load_dotenv()


def _optional_path(name: str) -> Path | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return Path(raw.strip()).expanduser()


@dataclass(slots=True)
class Settings:
    """Application configuration loaded from environment variables."""

    log_level: str = "INFO"
    log_dir: Path = Path("logs")
    keywords_path: Path | None = None
    parse_workers: int = 1
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        workers = int(os.getenv("PARSE_WORKERS", "1"))
        settings = cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_dir=Path(os.getenv("LOG_DIR", "logs")),
            keywords_path=_optional_path("KEYWORDS_PATH"),
            parse_workers=max(1, workers),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
        )
        return settings

    def ensure_directories(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def keyword_table(self) -> KeywordTable:
        """Return the configured keyword table, or the built-in one."""

        if self.keywords_path is None:
            return KeywordTable.default()
        if not self.keywords_path.is_file():
            raise KeywordTableError(f"Keyword table not found: {self.keywords_path}")
        return KeywordTable.load(self.keywords_path)
