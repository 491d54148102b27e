"""
Configuration settings for the static asset server
"""

import os
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

# Directory containing the server's own files
SERVER_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    # Listener
    host: str = "0.0.0.0"
    port: int = 8080

    # Static files
    root_dir: Path = SERVER_DIR
    url_prefix: str = "/"
    html_index: bool = True  # serve index.html for directory paths

    # Logging
    log_level: str = "info"

    class Config:
        env_prefix = "STATIC_SERVER_"
        env_file = ".env"
        case_sensitive = False
        frozen = True


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None):
    """Validate that the configuration can be served"""
    config = config or settings
    errors = []

    root = Path(config.root_dir)
    if not root.exists():
        errors.append(f"root directory {root} does not exist")
    elif not root.is_dir():
        errors.append(f"root directory {root} is not a directory")
    elif not os.access(root, os.R_OK | os.X_OK):
        errors.append(f"root directory {root} is not readable")

    if not 0 <= config.port <= 65535:
        errors.append(f"port {config.port} is out of range")

    if not config.url_prefix.startswith("/"):
        errors.append(f"url prefix {config.url_prefix!r} must start with '/'")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True
