"""CEP loader: look up a Brazilian postal code and persist the address."""

__version__ = "1.0.0"
