"""Service configuration, read from the environment (optionally a .env file)."""

import os
from pathlib import Path

from dotenv import load_dotenv

env_path = Path(__file__).resolve().parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)

# Display versions accepted by the HTTP API
SUPPORTED_VERSIONS = ("2.1", "3.0", "4.0")

# Version used when a request does not name one
DEFAULT_VCARD_VERSION = os.getenv("VCARD_DEFAULT_VERSION", "3.0")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
