"""Database infrastructure: SQLAlchemy engine, sessions and table models."""
from .engine import get_async_engine
from .session import get_async_sessionmaker, session_scope
