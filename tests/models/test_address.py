"""Unit tests for the Address model."""

import json
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from cep_loader.models.address import Address


def test_fields_match_upstream_json(viacep_body: dict) -> None:
    """Test that each upstream field maps to its attribute."""
    address = Address.model_validate(viacep_body)

    assert address.postal_code == "08111430"
    assert address.street == "Rua Example"
    assert address.neighborhood == "Centro"
    assert address.locality == "São Paulo"
    assert address.state == "SP"


def test_missing_fields_default_to_none(viacep_body: dict) -> None:
    """Test that fields absent from the response stay None."""
    address = Address.model_validate(viacep_body)

    assert address.complement is None
    assert address.ibge is None
    assert address.gia is None
    assert address.ddd is None
    assert address.siafi is None


def test_full_upstream_body() -> None:
    """Test a complete ViaCEP body, including auxiliary codes."""
    address = Address.model_validate(
        {
            "cep": "01001-000",
            "logradouro": "Praça da Sé",
            "complemento": "lado ímpar",
            "bairro": "Sé",
            "localidade": "São Paulo",
            "uf": "SP",
            "ibge": "3550308",
            "gia": "1004",
            "ddd": "11",
            "siafi": "7107",
        }
    )

    assert address.complement == "lado ímpar"
    assert address.ibge == "3550308"
    assert address.gia == "1004"
    assert address.ddd == "11"
    assert address.siafi == "7107"


def test_upstream_keys_are_case_insensitive() -> None:
    """Test that CEP, Logradouro and similar spellings are accepted."""
    address = Address.model_validate(
        {"CEP": "08111430", "Logradouro": "Rua Example", "UF": "SP"}
    )

    assert address.postal_code == "08111430"
    assert address.street == "Rua Example"
    assert address.state == "SP"


def test_numeric_codes_are_coerced_to_text() -> None:
    """Test that numeric auxiliary codes are stored as strings."""
    address = Address.model_validate({"cep": "08111430", "ddd": 11, "ibge": 3550308})

    assert address.ddd == "11"
    assert address.ibge == "3550308"


def test_unknown_keys_are_ignored() -> None:
    """Test that extra upstream keys do not fail validation."""
    address = Address.model_validate({"cep": "08111430", "regiao": "Sudeste"})

    assert address.postal_code == "08111430"
    assert not hasattr(address, "regiao")


def test_populate_by_attribute_name() -> None:
    """Test building an Address with Python attribute names."""
    address = Address(postal_code="08111430", locality="São Paulo")

    assert address.postal_code == "08111430"
    assert address.locality == "São Paulo"


def test_created_at_defaults_to_now() -> None:
    """Test that created_at is stamped at construction in UTC."""
    before = datetime.now(timezone.utc)
    address = Address(postal_code="08111430")
    after = datetime.now(timezone.utc)

    assert address.created_at.tzinfo is not None
    assert before <= address.created_at <= after
    assert after - address.created_at < timedelta(seconds=1)


def test_created_at_is_per_instance() -> None:
    """Test that every Address gets its own timestamp."""
    first = Address(postal_code="08111430")
    second = Address(postal_code="08111430")

    assert second.created_at >= first.created_at


def test_created_at_cannot_be_reassigned() -> None:
    """Test that created_at is fixed after construction."""
    address = Address(postal_code="08111430")
    original = address.created_at

    with pytest.raises(ValidationError):
        address.created_at = datetime(2020, 1, 1, tzinfo=timezone.utc)

    assert address.created_at == original


def test_other_fields_are_mutable() -> None:
    """Test that informational fields can be updated."""
    address = Address(postal_code="08111430")
    address.street = "Rua Nova"

    assert address.street == "Rua Nova"


def test_to_json_uses_upstream_names(viacep_body: dict) -> None:
    """Test that the log serialization uses upstream field names."""
    address = Address.model_validate(viacep_body)

    data = json.loads(address.to_json())

    assert data["cep"] == "08111430"
    assert data["logradouro"] == "Rua Example"
    assert data["bairro"] == "Centro"
    assert data["localidade"] == "São Paulo"
    assert data["uf"] == "SP"
    assert data["complemento"] is None
    assert datetime.fromisoformat(data["created_at"]) == address.created_at


def test_str_is_json(viacep_body: dict) -> None:
    """Test that str() returns the JSON form."""
    address = Address.model_validate(viacep_body)

    assert str(address) == address.to_json()


@pytest.mark.parametrize(
    "body",
    [
        {"cep": "08111430", "CEP": "99999999"},
        {"CEP": "99999999", "cep": "08111430"},
    ],
    ids=["lowercase-first", "lowercase-last"],
)
def test_exact_lowercase_key_wins(body: dict) -> None:
    """Test that cep is preferred over CEP whatever the key order."""
    assert Address.model_validate(body).postal_code == "08111430"


def test_from_upstream_reads_only_upstream_fields(viacep_body: dict) -> None:
    """Test that from_upstream ignores created_at and attribute names."""
    before = datetime.now(timezone.utc)
    address = Address.from_upstream(
        {**viacep_body, "created_at": "1999-01-01T00:00:00Z", "street": "Outra Rua"}
    )

    assert address.created_at >= before
    assert address.street == "Rua Example"


def test_from_upstream_is_case_insensitive() -> None:
    """Test that from_upstream keeps mixed-case upstream keys."""
    address = Address.from_upstream({"Cep": "08111430", "UF": "SP"})

    assert address.postal_code == "08111430"
    assert address.state == "SP"
