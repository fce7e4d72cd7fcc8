"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    SQL_ECHO: bool
    LOG_LEVEL: str
    VIEW_PREFIX: str
    VIEW_SUFFIX: str
    TEMPLATES_DIR: Path

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'app.db'}")
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.VIEW_PREFIX = os.getenv("VIEW_PREFIX", "products/")
        self.VIEW_SUFFIX = os.getenv("VIEW_SUFFIX", ".html")
        self.TEMPLATES_DIR = Path(os.getenv("TEMPLATES_DIR", str(Path(__file__).resolve().parent / "templates")))
        self._validate()

    def _validate(self):
        if not self.TEMPLATES_DIR.is_dir():
            raise RuntimeError(f"TEMPLATES_DIR does not exist: {self.TEMPLATES_DIR}")
        if not self.VIEW_SUFFIX:
            raise RuntimeError("VIEW_SUFFIX must not be empty")


settings = Settings()
