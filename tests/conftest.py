"""Shared pytest fixtures: stub ViaCEP transport and SQLite database."""

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest
from sqlalchemy import Engine, Table

from cep_loader.repositories.address_repository import AddressRepository
from cep_loader.repositories.base import build_engine
from cep_loader.services.lookup_client import ViaCepClient
from infrastructure.address_table import create_address_table

TABLE_NAME = "TesteFunction"


@pytest.fixture
def viacep_body() -> dict:
    """Lookup response for the default postal code."""
    return {
        "cep": "08111430",
        "logradouro": "Rua Example",
        "bairro": "Centro",
        "localidade": "São Paulo",
        "uf": "SP",
    }


@pytest.fixture
def make_lookup_client() -> Callable[..., ViaCepClient]:
    """Build a ViaCepClient whose requests are answered by a handler."""
    clients: list[httpx.Client] = []

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> ViaCepClient:
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        clients.append(http_client)
        return ViaCepClient(base_url="https://viacep.com.br/ws", client=http_client)

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def lookup_client(make_lookup_client, viacep_body: dict) -> ViaCepClient:
    """ViaCepClient answering every request with viacep_body."""
    return make_lookup_client(lambda request: httpx.Response(200, json=viacep_body))


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    """URL of a file-backed SQLite database, visible across connections."""
    return f"sqlite:///{tmp_path / 'cep_loader.db'}"


@pytest.fixture
def sqlite_engine(database_url: str) -> Engine:
    """Engine for the test database."""
    engine = build_engine(database_url)
    yield engine
    engine.dispose()


@pytest.fixture
def address_table(sqlite_engine: Engine) -> Table:
    """Create the target table in the test database."""
    return create_address_table(sqlite_engine, TABLE_NAME)


@pytest.fixture
def repository(sqlite_engine: Engine, address_table: Table) -> AddressRepository:
    """AddressRepository writing to the test database."""
    return AddressRepository(engine=sqlite_engine, table=address_table)
