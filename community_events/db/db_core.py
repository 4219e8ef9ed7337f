"""Core database functionality and configuration.

This module provides engine construction, schema bootstrapping and
session handling for the event store, together with the store's
exception hierarchy.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine, inspect, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..models.event import Event  # noqa
from ..config.environment import IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)

class DatabaseConfig:
    """Database configuration settings."""

    def __init__(
        self,
        url: Optional[str] = None,
        sqlite_path: Optional[Path] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True,
        sqlite_timeout: float = 30
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via the url parameter. In development a SQLite file
        is used unless a url is given.

        Args:
            url: Explicit SQLAlchemy connection URL (overrides environment lookup)
            sqlite_path: Path to SQLite database file (for development)
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
                        (total connections = pool_size + max_overflow)
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled (prevent stale)
            pool_pre_ping: Whether to ping connections before using them
            sqlite_timeout: Seconds a SQLite connection waits on a locked database

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via url parameter or DATABASE_URL env variable
        """
        if url:
            self.url = url
        elif IS_PRODUCTION_ENVIRONMENT:
            self.url = os.environ.get('DATABASE_URL')
            if not self.url:
                raise ValueError(
                    "Database URL must be provided either via url parameter "
                    "or DATABASE_URL environment variable when in production environment"
                )
        else:
            sqlite_path = sqlite_path or Path(__file__).parent.parent.parent / 'data' / 'events.db'
            sqlite_path.parent.mkdir(parents=True, exist_ok=True)
            self.url = f"sqlite:///{sqlite_path}"

        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping
        self.sqlite_timeout = sqlite_timeout

    @property
    def connection_url(self) -> str:
        """Get the database connection URL."""
        return self.url

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def is_in_memory(self) -> bool:
        return self.is_sqlite and (self.url in ('sqlite://', 'sqlite:///') or ':memory:' in self.url)

    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args = {"echo": self.echo}

        # SQLite-specific configuration
        if self.is_sqlite:
            # Outlasts a slow notification holding the write lock
            args["connect_args"] = {
                "check_same_thread": False,
                "timeout": self.sqlite_timeout
            }
            # An in-memory database only lives as long as its single connection
            if self.is_in_memory:
                args["poolclass"] = StaticPool

        # Server database configuration
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })

        return args

class StoreError(Exception):
    """Base exception for event store errors."""
    pass

class ConnectionError(StoreError):
    """Raised when there are issues connecting to the database."""
    pass

class SessionError(StoreError):
    """Raised when there are issues with database sessions."""
    pass

class CommitError(SessionError):
    """Raised when a transaction cannot be committed."""
    pass

class Database:
    """Core database management class."""

    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._session_factory = sessionmaker(expire_on_commit=False)
        self._tables_checked = False

        # Initialize engine on creation
        self._setup_engine()

    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        try:
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
            self._session_factory.configure(bind=self.engine)
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e

    def init_db(self) -> None:
        """Initialize the database schema."""
        if not self.engine:
            raise ConnectionError("Database engine not initialized")

        try:
            Base.metadata.create_all(self.engine)
            logger.info("Database schema initialized successfully")
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to initialize database schema: {e}") from e

    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if not self._tables_checked:
            if not self.engine:
                raise ConnectionError("Database engine not initialized")

            try:
                inspector = inspect(self.engine)
                existing_tables = inspector.get_table_names()
                required_tables = set(Base.metadata.tables)

                if not all(table in existing_tables for table in required_tables):
                    logger.info("Some tables missing, initializing database schema")
                    self.init_db()

                self._tables_checked = True

            except SQLAlchemyError as e:
                raise StoreError(f"Failed to verify/create database schema: {e}") from e

    def check_connection(self) -> None:
        """Run a trivial query to prove the database is reachable."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            raise ConnectionError(f"Database is not reachable: {e}") from e

    def new_session(self) -> Session:
        """
        Open a session that the caller owns.

        Used for units of work whose commit point is decided outside the
        database layer. The caller must commit or roll back and close it.
        """
        self.ensure_tables_exist()
        return self._session_factory()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.

        This is the preferred way to get a database session. It handles
        commit/rollback automatically and ensures proper cleanup.

        Example:
            with db.session() as session:
                event = session.get(Event, event_id)
                # No need to call commit - it's handled automatically

        Raises:
            SessionError: If there are issues with the session
            StoreError: If database schema verification fails
        """
        # Ensure tables exist before providing a session
        self.ensure_tables_exist()

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def dispose(self) -> None:
        """Release all pooled connections."""
        if self.engine:
            self.engine.dispose()

# Module-level instance, created on first use
_db: Optional[Database] = None

def get_database() -> Database:
    """Get the process-wide database built from the environment configuration."""
    global _db
    if _db is None:
        _db = Database()
    return _db
