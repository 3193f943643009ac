"""
Database connection and session management.
"""
import logging
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker
from invitely.core.config import DATABASE_URL

logger = logging.getLogger(__name__)

if not DATABASE_URL:
    raise ValueError("DATABASE_URL not configured. Create invitely/config_local.py from docs/BACKEND_config_local.example.py")

if DATABASE_URL.startswith("sqlite"):
    # Local development fallback, no MySQL install required
    _engine_kwargs = {"connect_args": {"check_same_thread": False}}
else:
    _engine_kwargs = {
        "pool_recycle": 3600,  # Recycle connections after 1 hour
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": 30,
    }

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using
    echo=False,  # Set to True for SQL debugging
    **_engine_kwargs
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency for FastAPI to get database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        try:
            db.close()
        except Exception as e:
            # Connection may already be gone; the session is discarded either way
            logger.warning(f"Error closing database session (connection may be lost): {str(e)}")
