"""
Database connection and session management.
"""
from __future__ import annotations

from typing import Any, Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.config import Settings, settings


def create_db_engine(config: Settings) -> Engine:
    """
    Build the pooled PostgreSQL engine shared by every request.
    """
    connect_args: dict[str, Any] = {"connect_timeout": config.db_connect_timeout}
    if config.db_statement_timeout_ms:
        connect_args["options"] = f"-c statement_timeout={config.db_statement_timeout_ms}"

    return create_engine(
        config.database_url,
        pool_pre_ping=True,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_timeout=config.db_pool_timeout,
        pool_recycle=config.db_pool_recycle,
        connect_args=connect_args,
        echo=False,
    )


engine: Engine = create_db_engine(settings)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for getting a database session.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine | None = None) -> None:
    """
    Create the subscriptions table and its lookup index when absent.
    """
    from app.models import Base

    Base.metadata.create_all(bind=bind or engine)


def check_database_connection(db: Session) -> bool:
    """
    Return True when the database connection is healthy.
    """
    try:
        db.execute(text("SELECT 1"))
        return True
    except SQLAlchemyError:
        db.rollback()
        return False


def database_health(db: Session) -> dict[str, Any]:
    """
    Return structured database health details for the session's engine.
    """
    bind = db.get_bind()
    try:
        db.execute(text("SELECT 1"))
        return {
            "ok": True,
            "dialect": bind.dialect.name,
            "database": bind.url.database,
        }
    except SQLAlchemyError as exc:
        db.rollback()
        return {
            "ok": False,
            "error": str(exc),
        }
