# /app/core/config.py

"""
Central place for the environment-driven settings of the dashboard backend.

Every value has a local-development default so the app boots with nothing
but an empty environment.
"""

import os
from typing import List

# --- Database ---
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./school.db")

# --- Page Renderer ---
# Base URL the server-side pages use to reach the procedure endpoints.
APP_URL = os.getenv("APP_URL", "http://localhost:8000")
PAGE_FETCH_TIMEOUT = float(os.getenv("PAGE_FETCH_TIMEOUT", "10"))

# --- Caller Identity ---
USER_HEADER = os.getenv("USER_HEADER", "X-User-Id")
SOURCE_HEADER = "x-source"

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# --- CORS ---
CORS_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

APP_VERSION = "1.0.0"
