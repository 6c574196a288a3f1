"""
Database engine, session factory and declarative base
"""

from sqlalchemy import create_engine, event
from sqlalchemy.orm import declarative_base, sessionmaker

from fieldcheckin.core.config import settings


def sqlite_connect_args(url: str) -> dict:
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": 30}
    return {}


def enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Cascade and restrict rules live in the store; SQLite only honours them with this pragma."""
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_engine(settings.DATABASE_URL, connect_args=sqlite_connect_args(settings.DATABASE_URL))
event.listen(engine, "connect", enable_sqlite_foreign_keys)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Yield a session scoped to one request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
