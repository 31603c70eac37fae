"""
PyMultiKey - a mutable dictionary keyed by two-dimensional (major, minor) keys.

Example:
    from pymultikey import MultiKeyDictionary

    tiles = MultiKeyDictionary()
    tiles.add(0, 0, 'grass')
    tiles[0, 1] = 'water'
    tiles.query_minor_key_count(0)  # 2
"""

from .comparers import (
    DEFAULT_COMPARER,
    ComparerTable,
    EqualityComparer,
    IdentityComparer,
    KeyFuncComparer,
)
from .enumerators import Enumerator, MajorKeyValueEnumerator, MinorKeyValueEnumerator
from .errors import (
    CollectionModifiedError,
    DuplicateKeyError,
    InvalidKeyError,
    InvalidStateError,
    KeyNotFoundError,
    MultiKeyError,
    ReadOnlyCollectionError,
)
from .multi_key import MultiKey
from .multi_key_dictionary import InsertBehavior, MultiKeyDictionary
from .views import KeyCollection, ValueCollection

__version__ = '1.0.0'

__all__ = [
    'MultiKey',
    'MultiKeyDictionary',
    'InsertBehavior',
    'Enumerator',
    'MajorKeyValueEnumerator',
    'MinorKeyValueEnumerator',
    'KeyCollection',
    'ValueCollection',
    'EqualityComparer',
    'IdentityComparer',
    'KeyFuncComparer',
    'ComparerTable',
    'DEFAULT_COMPARER',
    'MultiKeyError',
    'KeyNotFoundError',
    'DuplicateKeyError',
    'InvalidKeyError',
    'InvalidStateError',
    'CollectionModifiedError',
    'ReadOnlyCollectionError',
]
