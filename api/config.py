"""
API configuration.

Values are read from the environment (and the project root .env file).

- CORS_ALLOW_ORIGINS: comma-separated list of allowed origins (default "*")
- LOG_LEVEL: root logging level (default "INFO")
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


CORS_ALLOW_ORIGINS = _split_origins(os.getenv("CORS_ALLOW_ORIGINS", "*")) or ["*"]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
