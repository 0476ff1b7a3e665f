from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base
from sqlalchemy.orm import sessionmaker

# Base class for all database models
# All models inherit from this to get SQLAlchemy ORM functionality
Base = declarative_base()


def build_engine(database_url: str, **kwargs) -> Engine:
    """
    Create a database engine - manages connection pool.

    SQLite connections are shared across the threads FastAPI runs sync
    dependencies in, so the same-thread check is switched off for them.
    """
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    # autocommit=False: Changes require explicit commit
    # autoflush=False: Don't auto-flush before queries
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create tables for every model registered on Base if they don't exist"""
    # Importing the models registers them on Base.metadata
    from account_service.models import user  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request):
    """
    Dependency for getting database session.

    The session factory lives on app.state (built by create_app), so each
    application instance talks to its own database.
    The session is always closed after the request completes.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        # Always close session, even if request raises an exception
        # Prevents connection leaks
        db.close()
