"""Configuration, read from the environment (and `.env` when present)."""
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Project root
BASE_DIR = Path(__file__).parent.parent

load_dotenv(BASE_DIR / ".env")

# Database: defaults to a local SQLite file under data/
DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR}/data/fintrack.db")

# API
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", "4000"))

# Bearer token verification (HS256 keys should be at least 32 bytes)
DEFAULT_JWT_SECRET = "fintrack-development-secret-change-me-in-production"
JWT_SECRET = os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET)
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_DAYS = int(os.getenv("JWT_EXPIRES_DAYS", "7"))


def parse_origins(raw: str) -> List[str]:
    """Comma separated origins, blanks dropped; "*" allows everything."""
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


# CORS: comma separated list, "*" allows everything
CORS_ORIGINS = parse_origins(os.getenv("CORS_ORIGINS", "*"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# Demo data is only written when explicitly allowed
ALLOW_DEMO_SEED = os.getenv("ALLOW_DEMO_SEED", "").lower() in ("1", "true", "yes")
