"""Address repository for transactional SQL inserts."""

from typing import Any

from sqlalchemy import (
    Column,
    DateTime,
    Engine,
    MetaData,
    String,
    Table,
    Transaction,
    func,
    insert,
    select,
)
from sqlalchemy.exc import SQLAlchemyError

from cep_loader.config import settings
from cep_loader.logging.config import get_logger
from cep_loader.models.address import Address
from cep_loader.repositories.base import BaseRepository
from cep_loader.schemas.result import PersistResult

logger = get_logger(__name__)


def build_address_table(
    table_name: str | None = None,
    schema: str | None = None,
    metadata: MetaData | None = None,
) -> Table:
    """
    Describe the target table.

    Args:
        table_name: Table name (defaults to TARGET_TABLE setting)
        schema: Schema, or database.owner on SQL Server (none if None)
        metadata: MetaData to attach the table to

    Returns:
        SQLAlchemy Table with the five persisted columns
    """
    return Table(
        table_name or settings.target_table,
        metadata or MetaData(),
        Column("cep", String(9)),
        Column("logradouro", String(255)),
        Column("bairro", String(255)),
        Column("localidade", String(255)),
        Column("created_at", DateTime(timezone=True)),
        schema=schema,
    )


class AddressRepository(BaseRepository):
    """
    Repository writing Address records to the target table.

    Every insert runs in its own connection and transaction. There is
    no dedup key: inserting the same address twice writes two rows.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        table: Table | None = None,
    ) -> None:
        """
        Initialize AddressRepository.

        Args:
            engine: SQLAlchemy engine (built from settings if None)
            table: Target table (built from settings if None)
        """
        super().__init__(engine)
        self.table = (
            table
            if table is not None
            else build_address_table(schema=settings.target_schema)
        )

    def _serialize_address(self, address: Address) -> dict[str, Any]:
        """Map an Address to the bound column values."""
        return {
            "cep": address.postal_code,
            "logradouro": address.street,
            "bairro": address.neighborhood,
            "localidade": address.locality,
            "created_at": address.created_at,
        }

    def insert(
        self, address: Address, correlation_id: str | None = None
    ) -> PersistResult:
        """
        Insert one address inside an explicit transaction.

        Commits on success. Any error while building or executing the
        statement rolls back, is logged with full detail and is returned
        as a rolled_back result instead of being raised.

        Args:
            address: Record to persist
            correlation_id: Request id for log entries

        Returns:
            PersistResult describing the transaction outcome

        Raises:
            DatabaseConnectionError: If the connection cannot be opened
        """
        log_extra = {"correlation_id": correlation_id}

        with self.connect(correlation_id) as connection:
            transaction = connection.begin()
            try:
                statement = insert(self.table).values(
                    **self._serialize_address(address)
                )
                connection.execute(statement)
                transaction.commit()
            except Exception as exc:
                logger.error(
                    f"Cannot complete the transaction, ERROR: {exc}",
                    exc_info=exc,
                    extra={
                        **log_extra,
                        "context": {
                            "table": self.table.fullname,
                            "postal_code": address.postal_code,
                        },
                    },
                )
                self._rollback(transaction, log_extra)
                return PersistResult(
                    status="rolled_back",
                    rows_inserted=0,
                    error=f"{type(exc).__name__}: {exc}",
                )

            logger.info(
                f"Address persisted {address.to_json()}",
                extra={**log_extra, "context": {"table": self.table.fullname}},
            )
        return PersistResult(status="committed", rows_inserted=1)

    def _rollback(self, transaction: Transaction, log_extra: dict) -> None:
        """Roll back, logging a rollback failure instead of raising it."""
        try:
            transaction.rollback()
        except SQLAlchemyError as exc:
            # Link dropped mid-transaction; the server discards the work
            logger.error(
                "Rollback failed",
                exc_info=exc,
                extra={**log_extra, "context": {"table": self.table.fullname}},
            )

    def count(self) -> int:
        """Count rows in the target table."""
        with self.connect() as connection:
            return connection.execute(
                select(func.count()).select_from(self.table)
            ).scalar_one()

    def list_all(self) -> list[dict[str, Any]]:
        """Return every row of the target table as dicts."""
        with self.connect() as connection:
            rows = connection.execute(select(self.table)).mappings().all()
            return [dict(row) for row in rows]
