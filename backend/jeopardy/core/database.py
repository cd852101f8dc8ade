"""
Database configuration
"""
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker

from jeopardy.core.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str, **kwargs):
    """Create an engine; SQLite connections get foreign keys switched on"""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})

    engine = create_engine(database_url, echo=False, **kwargs)

    if engine.dialect.name == "sqlite":
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(settings.DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    """Yield a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_session_factory():
    """Session factory for work that outlives the request (background tasks)"""
    return SessionLocal

def import_models():
    """Register every model on Base.metadata"""
    from jeopardy.models import user, rbac, game, session  # noqa: F401

async def init_db():
    """Initialize the database"""
    import_models()
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized (%s)", engine.url.render_as_string(hide_password=True))
