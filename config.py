"""
Configuration for the forensic correlation dashboard.

Settings come from the environment, with .env loaded first.
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env - check local first, then the user-level config
load_dotenv()
user_config = Path.home() / ".forensic-correlator" / "config.env"
if user_config.exists():
    load_dotenv(user_config)

DATA_DIR = Path(os.getenv("FORENSIC_DATA_DIR", "data"))
RECORDS_DIR = DATA_DIR / "records"
STORE_BACKEND = os.getenv("FORENSIC_STORE_BACKEND", "json")
WEB_PORT = int(os.getenv("FORENSIC_WEB_PORT", "5001"))
WEB_URL = f"http://localhost:{WEB_PORT}"
