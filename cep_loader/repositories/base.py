"""Base repository class with common SQL connection handling."""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Connection, Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.pool import NullPool

from cep_loader.config import settings
from cep_loader.exceptions import ConfigurationError, DatabaseConnectionError
from cep_loader.logging.config import get_logger

logger = get_logger(__name__)


def build_engine(database_url: str | None = None) -> Engine:
    """
    Build a SQLAlchemy engine for the configured database.

    Connections are not pooled: every connect() opens a new DBAPI
    connection and closing it releases that connection.

    Args:
        database_url: SQLAlchemy URL (defaults to DATABASE_URL setting)

    Returns:
        Engine bound to the database

    Raises:
        ConfigurationError: If no URL is configured or it cannot be parsed
    """
    url = database_url or settings.database_url
    if not url:
        raise ConfigurationError(
            message="DATABASE_URL is not set", setting="database_url"
        )

    try:
        parsed = make_url(url)
    except ArgumentError as exc:
        raise ConfigurationError(
            message="DATABASE_URL could not be parsed", setting="database_url"
        ) from exc

    logger.info(
        "Database engine configured",
        extra={"context": {"dialect": parsed.get_backend_name(), "database": parsed.database}},
    )
    return create_engine(parsed, poolclass=NullPool)


class BaseRepository:
    """
    Base repository providing connection lifetime handling.

    Subclasses open one connection per unit of work through connect(),
    which always closes it on exit.
    """

    def __init__(self, engine: Engine | None = None) -> None:
        """
        Initialize repository.

        Args:
            engine: SQLAlchemy engine (built from settings if None)
        """
        self.engine = engine or build_engine()

    @contextmanager
    def connect(self, correlation_id: str | None = None) -> Iterator[Connection]:
        """
        Open a connection and close it on every exit path.

        Raises:
            DatabaseConnectionError: If the connection cannot be opened
        """
        try:
            connection = self.engine.connect()
        except SQLAlchemyError as exc:
            logger.error(
                "Could not open database connection",
                exc_info=exc,
                extra={"correlation_id": correlation_id},
            )
            raise DatabaseConnectionError(
                message=f"Could not open database connection: {exc}",
                details={"dialect": self.engine.dialect.name},
            ) from exc

        with connection:
            yield connection

    def dispose(self) -> None:
        """Release engine resources."""
        self.engine.dispose()
