# backend/app/db.py

from pathlib import Path
from typing import Tuple

from app.core.settings import settings
from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import declarative_base, sessionmaker


def _normalize_db_url(raw_url: str) -> Tuple[str, str | None]:
    """
    Ensure sqlite URLs are absolute so we don't accidentally create multiple files
    when running commands from different working directories. Also accepts the
    legacy ``postgres://`` scheme some hosting providers hand out.
    """
    if raw_url.startswith("postgres://"):
        raw_url = raw_url.replace("postgres://", "postgresql://", 1)

    url = make_url(raw_url)
    resolved_path: str | None = None

    if url.drivername.startswith("sqlite"):
        db_path = url.database or "cinelog.db"
        path = Path(db_path)
        if not path.is_absolute():
            # backend/app/db.py -> ../.. is the repo root
            base_dir = Path(__file__).resolve().parents[2]
            path = (base_dir / path).resolve()
        resolved_path = str(path)
        url = url.set(database=resolved_path)

    # str(url) masks the password with ***
    return url.render_as_string(hide_password=False), resolved_path


DB_URL, SQLITE_PATH = _normalize_db_url(settings.db_url)

connect_args = {"check_same_thread": False} if DB_URL.startswith("sqlite") else {}

engine = create_engine(
    DB_URL, echo=False, future=True, connect_args=connect_args, pool_pre_ping=True
)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()


if DB_URL.startswith("sqlite"):

    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # sqlite ignores REFERENCES unless asked per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_db_path() -> str | None:
    """Return the resolved sqlite file path (if using sqlite)."""
    return SQLITE_PATH
