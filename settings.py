from __future__ import annotations
import os
from typing import List


APP_NAME = os.getenv("APP_NAME", "Graha.dev API")
APP_VERSION = os.getenv("APP_VERSION", "3.0.0")
PORT = int(os.getenv("PORT", "3000"))

# Fixed Lahiri approximation; not epoch-adjusted.
AYANAMSA = float(os.getenv("GRAHA_AYANAMSA", "24.12"))
DEFAULT_BIRTH_TIME = os.getenv("DEFAULT_BIRTH_TIME", "12:00")

CORS_ALLOW_ORIGINS: List[str] = [o.strip() for o in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",") if o.strip()]
REQUEST_LOGGING = os.getenv("REQUEST_LOGGING", "basic").lower()  # "off" | "basic" | "full"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
