"""Exceptions raised by the due-status engine and the vehicle file store."""


class InvalidInput(ValueError):
    """Input to a computation (or static configuration) is unusable."""


class StorageError(Exception):
    """A vehicle file could not be read or has an unexpected structure."""
