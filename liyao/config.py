"""Centralised settings for the LiyaoData tender client.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (one level up from this package)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Acquisition API
    # ------------------------------------------------------------------
    api_base_url: str = field(
        default_factory=lambda: os.environ.get("LIYAO_API_BASE_URL", "http://localhost:8000")
    )
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LIYAO_REQUEST_TIMEOUT", "120.0"))
    )

    # ------------------------------------------------------------------
    # Progress estimate
    # ------------------------------------------------------------------
    progress_budget: int = field(
        default_factory=lambda: int(os.environ.get("LIYAO_PROGRESS_BUDGET", "50"))
    )
    tick_interval: float = field(
        default_factory=lambda: float(os.environ.get("LIYAO_TICK_INTERVAL", "1.0"))
    )

    # ------------------------------------------------------------------
    # Table view
    # ------------------------------------------------------------------
    page_size: int = field(
        default_factory=lambda: int(os.environ.get("LIYAO_PAGE_SIZE", "10"))
    )
    sort_locale: str = field(
        default_factory=lambda: os.environ.get("LIYAO_SORT_LOCALE", "zh_Hant_TW")
    )
    # icu | uca
    collation: str = field(
        default_factory=lambda: os.environ.get("LIYAO_COLLATION", "icu")
    )

    @property
    def tenders_url(self) -> str:
        """Absolute URL of the tender listing endpoint."""
        return self.api_base_url.rstrip("/") + "/api/tenders"


# Module-level singleton — import this everywhere:
#   from liyao.config import settings
settings = Settings()
