"""AWS Lambda handler for the CEP loader.

Each invocation looks up the configured postal code on ViaCEP, logs the
address and inserts it into the target table inside one transaction.

The handler is stateless: the HTTP client and database engine are built
per invocation and released before returning.
"""

import uuid
from typing import Any

from cep_loader.config import settings
from cep_loader.exceptions import PersistFailedError
from cep_loader.logging.config import configure_logging, get_logger
from cep_loader.services.ingest_service import AddressIngestService

# Configure logging once per execution environment
configure_logging()

logger = get_logger(__name__)


def _get_or_generate_correlation_id(context: object) -> str:
    """
    Extract the Lambda request id or generate one for local runs.

    Args:
        context: Lambda context object (may be None)

    Returns:
        The correlation ID
    """
    request_id = getattr(context, "aws_request_id", None)
    return request_id or str(uuid.uuid4())


def lambda_handler(event: dict, context: object) -> dict[str, Any]:
    """
    AWS Lambda function handler.

    The event payload is not read; the postal code comes from settings.

    Args:
        event: Invocation event (ignored)
        context: Lambda context object with runtime information

    Returns:
        IngestResult as a JSON-compatible dict

    Raises:
        LookupFailedError: If the lookup service cannot be queried
        DatabaseConnectionError: If the database cannot be opened
        PersistFailedError: If the insert rolled back and
            FAIL_ON_PERSIST_ERROR is enabled
    """
    correlation_id = _get_or_generate_correlation_id(context)

    logger.info(
        "Invocation started",
        extra={
            "correlation_id": correlation_id,
            "context": {"request_id": correlation_id, "postal_code": settings.postal_code},
        },
    )

    service = AddressIngestService()
    try:
        result = service.run(correlation_id)
    finally:
        service.close()

    logger.info(
        "Invocation completed",
        extra={"correlation_id": correlation_id, "context": {"status": result.status}},
    )

    if result.status == "persist_failed" and settings.fail_on_persist_error:
        raise PersistFailedError(
            reason=result.persist.error if result.persist else None,
            details={"correlation_id": correlation_id},
        )

    return result.model_dump(mode="json")
