"""Tests for Settings validation."""

import pytest
from pydantic import ValidationError

from cep_loader.config import Settings


def test_defaults() -> None:
    """Test default lookup and table settings."""
    config = Settings(_env_file=None)

    assert config.postal_code == "08111430"
    assert config.lookup_base_url == "https://viacep.com.br/ws"
    assert config.target_table == "TesteFunction"
    assert config.fail_on_persist_error is False


def test_postal_code_hyphen_is_normalized() -> None:
    """Test that NNNNN-NNN is stored as digits."""
    assert Settings(postal_code="08111-430").postal_code == "08111430"


@pytest.mark.parametrize("code", ["0811143", "081114300", "ABCDEFGH", "08111_430", ""])
def test_invalid_postal_code_rejected(code: str) -> None:
    """Test that malformed codes fail at startup."""
    with pytest.raises(ValidationError):
        Settings(postal_code=code)


def test_env_variables_are_read(monkeypatch) -> None:
    """Test loading from environment variables."""
    monkeypatch.setenv("POSTAL_CODE", "01001000")
    monkeypatch.setenv("DATABASE_URL", "mssql+pyodbc://user:pass@db/teste")
    monkeypatch.setenv("TARGET_SCHEMA", "teste.dbo")
    monkeypatch.setenv("FAIL_ON_PERSIST_ERROR", "true")

    config = Settings(_env_file=None)

    assert config.postal_code == "01001000"
    assert config.database_url == "mssql+pyodbc://user:pass@db/teste"
    assert config.target_schema == "teste.dbo"
    assert config.fail_on_persist_error is True


def test_empty_database_url_is_none() -> None:
    """Test that a blank DATABASE_URL counts as unset."""
    assert Settings(database_url="  ").database_url is None


def test_base_url_trailing_slash_stripped() -> None:
    """Test normalization of the lookup base URL."""
    assert Settings(lookup_base_url="https://viacep.com.br/ws/").lookup_base_url == (
        "https://viacep.com.br/ws"
    )


def test_base_url_requires_http() -> None:
    """Test that non-http URLs are rejected."""
    with pytest.raises(ValidationError):
        Settings(lookup_base_url="ftp://viacep.com.br/ws")


@pytest.mark.parametrize("name", ["Teste Function", "1table", "t;drop", "a-b"])
def test_invalid_table_name_rejected(name: str) -> None:
    """Test that table names must be SQL identifiers."""
    with pytest.raises(ValidationError):
        Settings(target_table=name)


@pytest.mark.parametrize("schema", ["teste..dbo", "teste.d bo", "x;y"])
def test_invalid_schema_rejected(schema: str) -> None:
    """Test that schemas must be identifiers or dotted identifiers."""
    with pytest.raises(ValidationError):
        Settings(target_schema=schema)


def test_timeout_must_be_positive() -> None:
    """Test that a zero timeout is rejected."""
    with pytest.raises(ValidationError):
        Settings(lookup_timeout_seconds=0)


def test_log_level_is_uppercased() -> None:
    """Test log level normalization and validation."""
    assert Settings(log_level="debug").log_level == "DEBUG"
    with pytest.raises(ValidationError):
        Settings(log_level="verbose")
