"""HTTP client for the ViaCEP postal-code lookup API."""

from typing import Any

import httpx
from pydantic import ValidationError

from cep_loader.config import settings
from cep_loader.exceptions import LookupFailedError
from cep_loader.logging.config import get_logger
from cep_loader.models.address import Address

logger = get_logger(__name__)


class ViaCepClient:
    """
    Blocking client for ``GET {base_url}/{code}/json/``.

    Returns an Address for a found code and None when the service has
    nothing for it. Transport, status and decoding failures raise
    LookupFailedError.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """
        Initialize the lookup client.

        Args:
            base_url: Service root, e.g. https://viacep.com.br/ws
            timeout: Request timeout in seconds
            client: Preconfigured httpx.Client (owned by the caller)
        """
        self.base_url = (base_url or settings.lookup_base_url).rstrip("/")
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=timeout or settings.lookup_timeout_seconds,
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            self.client.close()

    def __enter__(self) -> "ViaCepClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def build_url(self, postal_code: str) -> str:
        return f"{self.base_url}/{postal_code}/json/"

    def fetch(
        self, postal_code: str, correlation_id: str | None = None
    ) -> Address | None:
        """
        Look up one postal code.

        Args:
            postal_code: Code to look up, sent as-is
            correlation_id: Request id for log entries

        Returns:
            Address populated from the response, or None if absent

        Raises:
            LookupFailedError: On network error, non-2xx status or bad JSON
        """
        url = self.build_url(postal_code)
        log_extra = {"correlation_id": correlation_id}

        logger.info(
            "Looking up postal code",
            extra={**log_extra, "context": {"postal_code": postal_code, "url": url}},
        )

        try:
            response = self.client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.error(
                "Lookup returned non-success status",
                exc_info=exc,
                extra={
                    **log_extra,
                    "context": {"postal_code": postal_code, "status_code": status_code},
                },
            )
            raise LookupFailedError(
                message=f"Lookup for {postal_code} returned HTTP {status_code}",
                postal_code=postal_code,
                status_code=status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error(
                "Lookup request failed",
                exc_info=exc,
                extra={**log_extra, "context": {"postal_code": postal_code}},
            )
            raise LookupFailedError(
                message=f"Lookup for {postal_code} failed: {exc}",
                postal_code=postal_code,
            ) from exc

        address = self._parse(response, postal_code, log_extra)

        if address is None:
            logger.warning(
                "Cannot complete the transaction, the lookup response is empty",
                extra={**log_extra, "context": {"postal_code": postal_code}},
            )
            return None

        logger.info(
            f"Body: {address.to_json()}",
            extra={**log_extra, "context": {"postal_code": postal_code}},
        )
        return address

    def _parse(
        self, response: httpx.Response, postal_code: str, log_extra: dict
    ) -> Address | None:
        """
        Decode the response body into an Address.

        Empty bodies, JSON null, non-object values and the upstream
        ``{"erro": true}`` not-found marker all count as absent.
        """
        if not response.content.strip():
            return None

        try:
            body = response.json()
        except ValueError as exc:
            logger.error(
                "Lookup returned malformed JSON",
                exc_info=exc,
                extra={**log_extra, "context": {"postal_code": postal_code}},
            )
            raise LookupFailedError(
                message=f"Lookup for {postal_code} returned malformed JSON",
                postal_code=postal_code,
                status_code=response.status_code,
            ) from exc

        if not isinstance(body, dict):
            return None

        # ViaCEP answers unknown codes with HTTP 200 and {"erro": true}
        if str(body.get("erro", "")).lower() == "true":
            return None

        try:
            return Address.from_upstream(body)
        except ValidationError as exc:
            logger.error(
                "Lookup response does not match the address shape",
                exc_info=exc,
                extra={**log_extra, "context": {"postal_code": postal_code}},
            )
            raise LookupFailedError(
                message=f"Lookup for {postal_code} returned an unexpected body",
                postal_code=postal_code,
                status_code=response.status_code,
            ) from exc
