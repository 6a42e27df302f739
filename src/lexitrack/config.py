"""Configuration settings for lexitrack."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)

DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))
DEFAULT_DATABASE_URL = f"sqlite:///{DATA_DIR / 'lexitrack.db'}"

# Review policy constants
MAX_RATE = 5  # rate scale is 0..MAX_RATE
UNREVIEWED_BOOST = 3  # weight multiplier for never reviewed words
WEIGHT_FLOOR = 1  # minimal selection weight of any word
DIFFICULT_MAX_RATE = 2
QUERY_LIMIT = 50
LEARNED_MIN_RATE = 4


def ensure_directories() -> None:
    """Ensure the data directory holding the default database exists."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class LearningSettings:
    """Review and practice policy settings."""
    max_rate: int = int(os.getenv("MAX_RATE", str(MAX_RATE)))
    unreviewed_boost: int = int(os.getenv("UNREVIEWED_BOOST", str(UNREVIEWED_BOOST)))
    weight_floor: int = int(os.getenv("WEIGHT_FLOOR", str(WEIGHT_FLOOR)))
    difficult_max_rate: int = int(os.getenv("DIFFICULT_MAX_RATE", str(DIFFICULT_MAX_RATE)))
    learned_min_rate: int = int(os.getenv("LEARNED_MIN_RATE", str(LEARNED_MIN_RATE)))
    practice_size: int = int(os.getenv("PRACTICE_SIZE", "10"))
    query_limit: int = int(os.getenv("QUERY_LIMIT", str(QUERY_LIMIT)))
    progress_days: int = int(os.getenv("PROGRESS_DAYS", "7"))


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_learning_settings() -> LearningSettings:
    """Get learning settings."""
    return LearningSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    learning: LearningSettings = field(default_factory=get_learning_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if not self.database.url:
            raise ValueError("DATABASE_URL is required")

        if self.learning.max_rate < 1:
            raise ValueError("MAX_RATE must be positive")

        if self.learning.weight_floor < 1:
            raise ValueError("WEIGHT_FLOOR must be at least 1")

        if self.learning.unreviewed_boost < 1:
            raise ValueError("UNREVIEWED_BOOST must be at least 1")

        if not 0 <= self.learning.difficult_max_rate <= self.learning.max_rate:
            raise ValueError("DIFFICULT_MAX_RATE must be between 0 and MAX_RATE")

        if not 0 <= self.learning.learned_min_rate <= self.learning.max_rate:
            raise ValueError("LEARNED_MIN_RATE must be between 0 and MAX_RATE")

        if self.learning.practice_size < 1:
            raise ValueError("PRACTICE_SIZE must be positive")

        if self.learning.query_limit < 1:
            raise ValueError("QUERY_LIMIT must be positive")

        if self.learning.progress_days < 1:
            raise ValueError("PROGRESS_DAYS must be positive")


# Create global settings instance
settings = Settings()
settings.validate()
