"""Ingest service: look up one postal code and persist the address."""

from cep_loader.config import Settings, settings
from cep_loader.exceptions import ConfigurationError
from cep_loader.logging.config import get_logger
from cep_loader.repositories.address_repository import (
    AddressRepository,
    build_address_table,
)
from cep_loader.repositories.base import build_engine
from cep_loader.schemas.result import IngestResult
from cep_loader.services.lookup_client import ViaCepClient

logger = get_logger(__name__)


class AddressIngestService:
    """
    Service layer for one fetch-log-persist cycle.

    The flow is linear: lookup, then a transactional insert. An empty
    lookup result stops the cycle before any database work.
    """

    def __init__(
        self,
        lookup_client: ViaCepClient | None = None,
        repository: AddressRepository | None = None,
        config: Settings | None = None,
    ) -> None:
        """
        Initialize AddressIngestService.

        Args:
            lookup_client: ViaCepClient instance (creates new if None)
            repository: AddressRepository instance (created lazily if None)
            config: Settings instance (global settings if None)
        """
        self.config = config or settings
        self.lookup_client = lookup_client or ViaCepClient(
            base_url=self.config.lookup_base_url,
            timeout=self.config.lookup_timeout_seconds,
        )
        self._repository = repository

    @property
    def repository(self) -> AddressRepository:
        # Built on first use so a skipped invocation never touches the database
        if self._repository is None:
            if not self.config.database_url:
                raise ConfigurationError(
                    message="DATABASE_URL is not set", setting="database_url"
                )
            self._repository = AddressRepository(
                engine=build_engine(self.config.database_url),
                table=build_address_table(
                    self.config.target_table, self.config.target_schema
                ),
            )
        return self._repository

    def run(self, correlation_id: str) -> IngestResult:
        """
        Look up the configured postal code and persist the result.

        Args:
            correlation_id: Request id for log entries and the result

        Returns:
            IngestResult with status persisted, persist_failed or skipped

        Raises:
            LookupFailedError: If the lookup service cannot be queried
            DatabaseConnectionError: If the database cannot be opened
        """
        postal_code = self.config.postal_code

        address = self.lookup_client.fetch(postal_code, correlation_id=correlation_id)
        if address is None:
            return IngestResult(
                status="skipped",
                correlation_id=correlation_id,
                postal_code=postal_code,
                message="Lookup returned no address, nothing persisted",
            )

        persist = self.repository.insert(address, correlation_id=correlation_id)

        if not persist.succeeded:
            logger.warning(
                "Address was not persisted",
                extra={
                    "correlation_id": correlation_id,
                    "context": {"postal_code": postal_code, "error": persist.error},
                },
            )
            return IngestResult(
                status="persist_failed",
                correlation_id=correlation_id,
                postal_code=postal_code,
                persist=persist,
                message="Insert rolled back",
            )

        return IngestResult(
            status="persisted",
            correlation_id=correlation_id,
            postal_code=postal_code,
            persist=persist,
            message="Address persisted",
        )

    def close(self) -> None:
        """Release the HTTP client and database engine."""
        self.lookup_client.close()
        if self._repository is not None:
            self._repository.dispose()
