"""
Exceptions raised by MultiKeyDictionary and its enumerators and views.

Each error also derives from the built-in exception a caller would expect from
a plain dict, so ``except KeyError`` keeps working for missing keys.
"""


class MultiKeyError(Exception):
    """Base class for all errors raised by this package."""


class KeyNotFoundError(MultiKeyError, KeyError):
    """A composite key has no value in the dictionary."""


class DuplicateKeyError(MultiKeyError, KeyError):
    """A composite key already has a value and the insert must not overwrite it."""


class InvalidKeyError(MultiKeyError, ValueError):
    """A key component is not allowed to be stored (e.g. None)."""


class InvalidStateError(MultiKeyError, RuntimeError):
    """The dictionary is not in a state the operation can proceed from."""


class CollectionModifiedError(InvalidStateError):
    """The dictionary was mutated while an enumerator was iterating it."""

    def __init__(self, message: str = "Collection modified during enumeration"):
        super().__init__(message)


class ReadOnlyCollectionError(MultiKeyError, TypeError):
    """A mutating operation was attempted on a read-only view."""

    def __init__(self, message: str = "Collection is read only"):
        super().__init__(message)
