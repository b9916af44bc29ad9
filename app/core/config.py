# /luct-portal/app/core/config.py

"""
Runtime configuration for the LUCT Portal backend.

Every value is read once from the process environment at import time. The
defaults are only suitable for local development; production deployments are
expected to set at least DATABASE_URL, JWT_SECRET and CLIENT_ORIGINS.
"""

import os
from typing import List

from dotenv import load_dotenv

# Values already present in the environment win over the .env file.
load_dotenv()

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./luct_portal.db")
DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", "10"))
# Seconds to wait for a free connection before giving up.
DB_POOL_TIMEOUT = int(os.getenv("DB_POOL_TIMEOUT", "10"))
DB_POOL_RECYCLE = int(os.getenv("DB_POOL_RECYCLE", "1800"))

# --- Credentials ---
SECRET_KEY = os.getenv("JWT_SECRET", "dev-insecure-secret-change-me")
ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_DAYS = int(os.getenv("ACCESS_TOKEN_EXPIRE_DAYS", "7"))

# --- HTTP ---
def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]

CLIENT_ORIGINS = _split_origins(os.getenv("CLIENT_ORIGINS", "http://localhost:5173"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
