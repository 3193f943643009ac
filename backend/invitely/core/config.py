"""
Configuration management.
Loads from config_local.py (gitignored) for secrets, with defaults.
"""
from typing import Optional

# Try to import local config (gitignored)
try:
    from invitely.config_local import (
        DATABASE_URL,
        SESSION_COOKIE_NAME,
        SESSION_SECRET,
        MASKING_SECRET,
    )
    # Optional keys fall back individually
    try:
        from invitely.config_local import FIELD_MASKING_PROVIDER
    except ImportError:
        FIELD_MASKING_PROVIDER = "fernet"
    try:
        from invitely.config_local import CORS_ORIGINS, LOG_LEVEL
    except ImportError:
        CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]
        LOG_LEVEL = "INFO"
    try:
        from invitely.config_local import (
            SMTP_HOST,
            SMTP_PORT,
            SMTP_USE_SSL,
            SMTP_USERNAME,
            SMTP_PASSWORD,
            SMTP_FROM_EMAIL,
            SMTP_FROM_NAME,
            FRONTEND_BASE_URL,
        )
    except ImportError:
        SMTP_HOST = None
        SMTP_PORT = 465
        SMTP_USE_SSL = True
        SMTP_USERNAME = None
        SMTP_PASSWORD = None
        SMTP_FROM_EMAIL = None
        SMTP_FROM_NAME = "Invitely"
        FRONTEND_BASE_URL = "http://localhost:3000"
except ImportError:
    # Fallback defaults: local SQLite database and demo secrets
    DATABASE_URL: str = "sqlite:///./invitely_dev.db"
    SESSION_COOKIE_NAME: str = "invitely_session"
    SESSION_SECRET: Optional[str] = None
    MASKING_SECRET: Optional[str] = None
    FIELD_MASKING_PROVIDER: str = "fernet"  # "fernet" or "plain"
    CORS_ORIGINS: list = ["http://localhost:3000", "http://127.0.0.1:3000"]
    LOG_LEVEL: str = "INFO"
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: int = 465
    SMTP_USE_SSL: bool = True
    SMTP_USERNAME: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_FROM_EMAIL: Optional[str] = None
    SMTP_FROM_NAME: str = "Invitely"
    FRONTEND_BASE_URL: str = "http://localhost:3000"

# Secret used when neither MASKING_SECRET nor SESSION_SECRET is configured.
# Masking is an obfuscation layer only, see services/masking.
DEMO_SECRET = "demo-secret-change-in-prod"


def get_settings():
    """Return settings object (for FastAPI dependency injection if needed)."""
    return type("Settings", (), {
        "database_url": DATABASE_URL,
        "session_cookie_name": SESSION_COOKIE_NAME,
        "session_secret": SESSION_SECRET,
        "masking_secret": MASKING_SECRET,
        "field_masking_provider": FIELD_MASKING_PROVIDER,
        "cors_origins": CORS_ORIGINS,
        "log_level": LOG_LEVEL,
        "smtp_host": SMTP_HOST,
        "smtp_port": SMTP_PORT,
        "smtp_use_ssl": SMTP_USE_SSL,
        "smtp_username": SMTP_USERNAME,
        "smtp_password": SMTP_PASSWORD,
        "smtp_from_email": SMTP_FROM_EMAIL,
        "smtp_from_name": SMTP_FROM_NAME,
        "frontend_base_url": FRONTEND_BASE_URL,
    })()
