"""Poised PMS configuration management.

Loads configuration from environment variables with sensible defaults.
A ``.env`` file in the working directory is honoured.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()


@dataclass
class DBConfig:
    """Database connection configuration."""

    url: str
    pool_size: int = 5
    pool_max_overflow: int = 5
    pool_timeout: int = 30
    echo: bool = False  # SQL logging

    @property
    def is_sqlite(self) -> bool:
        return "sqlite" in self.url.lower()


@dataclass
class LoggingConfig:
    """Structured logging settings."""

    level: str = "WARNING"
    json_logs: bool = False
    log_file: Path | None = None


@dataclass
class ConsoleConfig:
    """Console rendering settings."""

    width: int | None = None  # None lets rich detect the terminal width


@dataclass
class AppConfig:
    """Root application configuration.

    Loads from environment variables with fail-fast on missing required values.
    """

    db: DBConfig
    environment: str = "development"
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    console: ConsoleConfig = field(default_factory=ConsoleConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Required environment variables:
        - DATABASE_URL: SQLAlchemy async URL of the Poised database

        Optional (with defaults):
        - LOG_LEVEL: Logging verbosity (default: "WARNING")
        - JSON_LOGS: Emit JSON log lines (default: "false")
        - LOG_FILE: Also write logs to this file
        - CONSOLE_WIDTH: Fixed console width for tables

        Raises:
            KeyError: If required environment variables are missing
        """
        database_url = os.environ.get("DATABASE_URL")
        if not database_url:
            raise KeyError(
                "DATABASE_URL environment variable is required. "
                "Example: sqlite+aiosqlite:///./poised.db"
            )

        log_file = os.getenv("LOG_FILE")
        console_width = os.getenv("CONSOLE_WIDTH")

        return cls(
            environment=os.getenv("ENVIRONMENT", "development"),
            db=DBConfig(
                url=database_url,
                pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
                pool_max_overflow=int(os.getenv("DB_POOL_MAX_OVERFLOW", "5")),
                pool_timeout=int(os.getenv("DB_POOL_TIMEOUT", "30")),
                echo=os.getenv("DB_ECHO", "false").lower() == "true",
            ),
            logging=LoggingConfig(
                level=os.getenv("LOG_LEVEL", "WARNING").upper(),
                json_logs=os.getenv("JSON_LOGS", "false").lower() == "true",
                log_file=Path(log_file) if log_file else None,
            ),
            console=ConsoleConfig(
                width=int(console_width) if console_width else None,
            ),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Raises:
        KeyError: If required environment variables are missing
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached configuration so the next call re-reads the environment."""
    global _config
    _config = None
