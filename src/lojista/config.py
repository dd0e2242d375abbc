"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()

SUPPORTED_LOCALES = ("pt_BR", "en_US")


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on", "sim"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "Lojista"
    DB_FILENAME = "lojista.db"

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("LOJISTA_DEV_MODE", default=True)
        self.DATABASE_URL = os.getenv("LOJISTA_DATABASE_URL", self._build_sqlite_url())
        self.REPORT_LOCALE = os.getenv("LOJISTA_REPORT_LOCALE", "pt_BR")
        self.TRAILING_DAYS = _env_int("LOJISTA_TRAILING_DAYS", 7)
        self.REQUIRE_NON_EMPTY_EXPORT = _env_bool(
            "LOJISTA_REQUIRE_NON_EMPTY_EXPORT", default=False
        )
        if self.REPORT_LOCALE not in SUPPORTED_LOCALES:
            raise ValueError(
                f"LOJISTA_REPORT_LOCALE must be one of {', '.join(SUPPORTED_LOCALES)}"
            )
        if self.TRAILING_DAYS <= 0:
            raise ValueError("LOJISTA_TRAILING_DAYS must be positive.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("LOJISTA_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if not self.DATABASE_URL.startswith("sqlite"):
            return {}
        return {"connect_args": {"check_same_thread": False}}


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration for the test-suite: throwaway data dir, quiet console."""

    __test__ = False
    DEBUG = False
    TESTING = True

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data_dir_override = Path(data_dir) if data_dir is not None else None
        super().__init__()
        if self._data_dir_override is not None:
            self.DATABASE_URL = self._build_sqlite_url()
        self.DEV_MODE = False

    def _resolve_data_dir(self) -> Path:
        if self._data_dir_override is None:
            return super()._resolve_data_dir()
        self._data_dir_override.mkdir(parents=True, exist_ok=True)
        return self._data_dir_override
