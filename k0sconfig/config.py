"""Configuration management for the k0sconfig application."""
import logging
import os
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Config:
    """Application configuration with sensible defaults."""

    # Used whenever a caller passes an empty data directory
    DATA_DIR: str = os.getenv("K0S_DATA_DIR", "/var/lib/k0s")

    # Default API listen address
    API_ADDRESS: str = os.getenv("K0S_API_ADDRESS", "127.0.0.1")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def validate(cls) -> None:
        """Validate the application settings."""
        problems = []
        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            problems.append(f"LOG_LEVEL={cls.LOG_LEVEL}")
        if not os.path.isabs(cls.DATA_DIR):
            problems.append(f"K0S_DATA_DIR={cls.DATA_DIR} (must be absolute)")
        if problems:
            raise ValueError(f"Invalid configuration: {', '.join(problems)}")


def resolve_data_dir(data_dir: str) -> str:
    """Return ``data_dir`` or the configured default when it is empty."""
    return data_dir or Config.DATA_DIR

# Don't validate on import to allow for dynamic configuration
# Call Config.validate() explicitly when needed
