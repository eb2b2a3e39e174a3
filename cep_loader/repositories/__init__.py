"""Repository layer for SQL operations."""

from cep_loader.repositories.address_repository import (
    AddressRepository,
    build_address_table,
)

__all__ = ["AddressRepository", "build_address_table"]
