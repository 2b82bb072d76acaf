"""Configuration primitives for the workforce query layer."""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file from project root
env_path = Path(__file__).parent.parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_FALSE_VALUES = {"0", "false", "False", ""}


@dataclass(frozen=True)
class DatabaseSettings:
    """Connection details for the relational database."""

    driver: str = "mysql+pymysql"
    host: str = "127.0.0.1"
    port: int = 3306
    user: str = "workforce"
    password: str = "workforce"
    name: str = "workforce"

    @classmethod
    def from_env(cls) -> "DatabaseSettings":
        """Instantiate settings using environment overrides when present."""

        defaults = cls()
        return cls(
            driver=os.getenv("DB_DRIVER", defaults.driver),
            host=os.getenv("DB_HOST", defaults.host),
            port=int(os.getenv("DB_PORT", defaults.port)),
            user=os.getenv("DB_USER", defaults.user),
            password=os.getenv("DB_PASSWORD", defaults.password),
            name=os.getenv("DB_NAME", defaults.name),
        )

    @property
    def is_sqlite(self) -> bool:
        return self.driver.startswith("sqlite")

    @property
    def sqlalchemy_url(self) -> str:
        """Build a SQLAlchemy compatible URL."""

        if self.is_sqlite:
            return f"{self.driver}:///{self.name}"
        if self.password:
            credentials = f"{self.user}:{self.password}"
        else:
            credentials = self.user
        return f"{self.driver}://{credentials}@{self.host}:{self.port}/{self.name}"

    @property
    def masked_url(self) -> str:
        """Return the URL with the password hidden, for log output."""

        if self.is_sqlite:
            return self.sqlalchemy_url
        pwd = "***" if self.password else ""
        return f"{self.driver}://{self.user}:{pwd}@{self.host}:{self.port}/{self.name}"


@dataclass(frozen=True)
class Settings:
    """Top-level application configuration container."""

    database: DatabaseSettings
    sqlalchemy_echo: bool = False
    log_level: str = "INFO"
    log_dir: Optional[Path] = Path("logs")

    @classmethod
    def from_env(cls) -> "Settings":
        """Load configuration values from environment variables."""

        raw_log_dir = os.getenv("LOG_DIR", "logs")
        return cls(
            database=DatabaseSettings.from_env(),
            sqlalchemy_echo=os.getenv("SQLALCHEMY_ECHO", "0") not in _FALSE_VALUES,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_dir=Path(raw_log_dir) if raw_log_dir else None,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached ``Settings`` instance."""

    settings = Settings.from_env()

    # Plain stdlib logger: logging itself is configured from these settings.
    logging.getLogger(__name__).debug(
        "Settings initialised",
        extra={
            "sqlalchemy_echo": settings.sqlalchemy_echo,
            "log_level": settings.log_level,
            "database": {
                "driver": settings.database.driver,
                "host": settings.database.host,
                "port": settings.database.port,
                "name": settings.database.name,
                "user": settings.database.user,
            },
        },
    )
    return settings
