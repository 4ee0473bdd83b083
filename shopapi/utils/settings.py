# shopapi/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./shop.db")
SQL_ECHO = _flag("SQL_ECHO", "false")

JWT_SECRET = os.getenv("JWT_SECRET", "shopapi-super-secret-key-2026")
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
TOKEN_TTL_HOURS = int(os.getenv("TOKEN_TTL_HOURS", 24))

# koszyk bez logowania, identyfikowany naglowkiem x-session-id
DEFAULT_SESSION_ID = os.getenv("DEFAULT_SESSION_ID", "default-session")

SEED_ON_STARTUP = _flag("SEED_ON_STARTUP", "true")
ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
ADMIN_EMAIL = os.getenv("ADMIN_EMAIL", "admin@shopapi.dev")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "password123")

# stare demo /api/login - stale dane logowania
LEGACY_USERNAME = "admin"
LEGACY_PASSWORD = "password123"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = os.getenv("LOG_FORMAT", "console").lower()  # console | json
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", 3000))
