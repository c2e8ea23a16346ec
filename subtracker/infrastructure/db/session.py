"""
Database session management (SQLAlchemy)
"""
import psycopg
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker, Session

from subtracker.config import get_settings


class Base(DeclarativeBase):
    """
    SQLAlchemy declarative base for all ORM models
    """
    pass


# Singleton engine and session factory
_engine = None
_SessionLocal = None


def _connect_args(settings) -> dict:
    """psycopg connection options: connect timeout + per-statement deadline"""
    if not settings.get_sqlalchemy_url().startswith("postgresql"):
        return {}
    args = {"connect_timeout": settings.DB_CONNECT_TIMEOUT}
    if settings.DB_STATEMENT_TIMEOUT_MS > 0:
        args["options"] = f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT_MS}"
    return args


def get_engine():
    """Get or create SQLAlchemy engine (singleton)"""
    global _engine
    if _engine is None:
        settings = get_settings()
        _engine = create_engine(
            settings.get_sqlalchemy_url(),
            pool_pre_ping=True,
            connect_args=_connect_args(settings),
        )
    return _engine


def get_session_factory():
    """Get or create session factory (singleton)"""
    global _SessionLocal
    if _SessionLocal is None:
        engine = get_engine()
        _SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    return _SessionLocal


def get_db() -> Session:
    """
    Dependency для FastAPI - создает session и автоматически закрывает

    Usage:
        @router.get("/subscriptions")
        def list_subscriptions(db: Session = Depends(get_db)):
            ...
    """
    SessionLocal = get_session_factory()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create missing tables (no migrations, CREATE TABLE IF NOT EXISTS semantics)"""
    # Register ORM models on Base.metadata
    from subtracker.infrastructure.db import models  # noqa: F401

    Base.metadata.create_all(get_engine())


def dispose_engine() -> None:
    """Close pooled connections on shutdown"""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


def check_db_connection() -> None:
    """
    Health check - проверка доступности PostgreSQL (raw psycopg)

    Raises:
        psycopg.OperationalError: если БД недоступна
    """
    settings = get_settings()
    dsn = settings.get_sqlalchemy_url().replace("postgresql+psycopg://", "postgresql://", 1)
    with psycopg.connect(dsn, connect_timeout=settings.DB_CONNECT_TIMEOUT) as conn:
        with conn.cursor() as cur:
            cur.execute("SELECT 1;")
            cur.fetchone()
