"""Exceptions for the key-value store."""


class KVStoreError(Exception):
    """Raised when the key-value store fails to serve a request."""

    pass
