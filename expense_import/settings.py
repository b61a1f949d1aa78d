"""
Runtime settings from the environment (a local .env file is loaded if present).
"""

from __future__ import annotations

import logging
import os
from decimal import Decimal
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

if Path(".env").exists():
    load_dotenv()

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings:
    def __init__(self):
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
        self.HIGH_VALUE_THRESHOLD = Decimal(os.getenv("HIGH_VALUE_THRESHOLD", "50000"))
        self.FEEDBACK_LIMIT = self._optional_int(os.getenv("FEEDBACK_LIMIT", ""))

    @staticmethod
    def _optional_int(value: str) -> Optional[int]:
        value = value.strip()
        return int(value) if value else None


def configure_logging(level: Optional[str] = None) -> None:
    logging.basicConfig(level=(level or settings.LOG_LEVEL), format=LOG_FORMAT)


settings = Settings()
