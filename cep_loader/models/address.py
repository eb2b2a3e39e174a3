"""Address model for postal-code lookup results."""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Field names used by the ViaCEP response body
UPSTREAM_FIELDS = (
    "cep",
    "logradouro",
    "complemento",
    "bairro",
    "localidade",
    "uf",
    "ibge",
    "gia",
    "ddd",
    "siafi",
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Address(BaseModel):
    """
    One postal-code record returned by the lookup service.

    Attributes:
        postal_code: Postal code (CEP), 8 digits
        street: Street / address line (logradouro)
        complement: Address complement (complemento)
        neighborhood: Neighborhood (bairro)
        locality: City (localidade)
        state: State code (uf)
        ibge: IBGE municipality code
        gia: GIA code (São Paulo state only)
        ddd: Telephone area code
        siafi: SIAFI municipality code
        created_at: UTC instant the record was built in-process; set once
    """

    model_config = ConfigDict(
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    postal_code: Optional[str] = Field(None, alias="cep")
    street: Optional[str] = Field(None, alias="logradouro")
    complement: Optional[str] = Field(None, alias="complemento")
    neighborhood: Optional[str] = Field(None, alias="bairro")
    locality: Optional[str] = Field(None, alias="localidade")
    state: Optional[str] = Field(None, alias="uf")
    ibge: Optional[str] = None
    gia: Optional[str] = None
    ddd: Optional[str] = None
    siafi: Optional[str] = None
    created_at: datetime = Field(default_factory=_utc_now, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def match_upstream_keys(cls, data: Any) -> Any:
        """
        Match upstream keys case-insensitively (CEP, Cep and cep).

        When both spellings are present the exact lowercase key wins.
        """
        if not isinstance(data, dict):
            return data
        normalized = {
            key: value
            for key, value in data.items()
            if not (isinstance(key, str) and key.lower() in UPSTREAM_FIELDS)
            or key in UPSTREAM_FIELDS
        }
        for key, value in data.items():
            if isinstance(key, str) and key.lower() in UPSTREAM_FIELDS:
                normalized.setdefault(key.lower(), value)
        return normalized

    @classmethod
    def from_upstream(cls, body: dict[str, Any]) -> "Address":
        """
        Build an Address from a lookup response body.

        Only upstream fields are read; created_at is always stamped now,
        whatever the body carries.
        """
        return cls.model_validate(
            {
                key: value
                for key, value in body.items()
                if isinstance(key, str) and key.lower() in UPSTREAM_FIELDS
            }
        )

    def to_json(self) -> str:
        """Serialize with upstream field names, for logging."""
        return self.model_dump_json(by_alias=True)

    def __str__(self) -> str:
        return self.to_json()
