"""Data models for the CEP loader."""

from cep_loader.models.address import Address

__all__ = ["Address"]
