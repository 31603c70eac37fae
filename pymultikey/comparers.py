"""
Pluggable equality strategies for major keys, minor keys and values.

Python dicts always hash and compare keys with ``__hash__``/``__eq__``. When a
dictionary is configured with a non-default comparer, its tables are
ComparerTable instances, which wrap every key so that the dict underneath
hashes and compares it through the comparer instead.
"""

from collections.abc import MutableMapping
from typing import Any, Callable, Iterator, Optional, Tuple


class EqualityComparer:
    """
    Natural equality: ``==`` and ``hash()``.

    Subclass and override equals() and hash() to change how keys or values
    are matched. The two must agree: objects that are equal must hash equal.
    """

    def equals(self, x: Any, y: Any) -> bool:
        return x == y

    def hash(self, obj: Any) -> int:
        return hash(obj)

    def __repr__(self) -> str:
        return f'{type(self).__name__}()'


class IdentityComparer(EqualityComparer):
    """Matches objects only if they are the same object."""

    def equals(self, x: Any, y: Any) -> bool:
        return x is y

    def hash(self, obj: Any) -> int:
        return id(obj)


class KeyFuncComparer(EqualityComparer):
    """
    Compares objects by the result of a key function.

    Example:
        KeyFuncComparer(str.casefold) matches 'Diffuse' and 'DIFFUSE'.
    """

    __slots__ = ('key',)

    def __init__(self, key: Callable[[Any], Any]):
        self.key = key

    def equals(self, x: Any, y: Any) -> bool:
        return self.key(x) == self.key(y)

    def hash(self, obj: Any) -> int:
        return hash(self.key(obj))

    def __repr__(self) -> str:
        return f'KeyFuncComparer({self.key!r})'


DEFAULT_COMPARER = EqualityComparer()


def resolve_comparer(comparer: Optional[EqualityComparer]) -> EqualityComparer:
    """Return comparer, or the default comparer when None is given."""
    return DEFAULT_COMPARER if comparer is None else comparer


def is_default(comparer: EqualityComparer) -> bool:
    """True when comparer behaves exactly like a plain dict."""
    return type(comparer) is EqualityComparer


class _ComparedKey:
    """A key whose hash and equality are supplied by a comparer."""

    __slots__ = ('key', 'comparer', '_hash')

    def __init__(self, key: Any, comparer: EqualityComparer):
        self.key = key
        self.comparer = comparer
        self._hash = comparer.hash(key)

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other) -> bool:
        if not isinstance(other, _ComparedKey):
            return NotImplemented
        return self._hash == other._hash and self.comparer.equals(self.key, other.key)


class ComparerTable(MutableMapping):
    """
    A dict-like table whose keys are matched through an EqualityComparer.

    Iteration yields the keys as they were first stored.
    """

    __slots__ = ('_comparer', '_data')

    def __init__(self, comparer: EqualityComparer):
        self._comparer = comparer
        self._data = {}

    @property
    def comparer(self) -> EqualityComparer:
        return self._comparer

    def _wrap(self, key: Any) -> _ComparedKey:
        return _ComparedKey(key, self._comparer)

    def __getitem__(self, key: Any) -> Any:
        return self._data[self._wrap(key)][1]

    def __setitem__(self, key: Any, value: Any) -> None:
        wrapped = self._wrap(key)
        entry = self._data.get(wrapped)
        if entry is None:
            self._data[wrapped] = (key, value)
        else:
            # Keep the originally stored key object
            self._data[wrapped] = (entry[0], value)

    def __delitem__(self, key: Any) -> None:
        del self._data[self._wrap(key)]

    def __contains__(self, key: Any) -> bool:
        return self._wrap(key) in self._data

    def __iter__(self) -> Iterator[Any]:
        for key, _ in self._data.values():
            yield key

    def __len__(self) -> int:
        return len(self._data)

    def get(self, key: Any, default=None) -> Any:
        entry = self._data.get(self._wrap(key))
        return default if entry is None else entry[1]

    def pop(self, key: Any, *args) -> Any:
        wrapped = self._wrap(key)
        if wrapped in self._data:
            return self._data.pop(wrapped)[1]
        if args:
            return args[0]
        raise KeyError(key)

    def items(self) -> Iterator[Tuple[Any, Any]]:
        return iter(self._data.values())

    def values(self) -> Iterator[Any]:
        for _, value in self._data.values():
            yield value

    def clear(self) -> None:
        self._data.clear()

    def __repr__(self) -> str:
        items = ', '.join(f'{k!r}: {v!r}' for k, v in self._data.values())
        return f'ComparerTable({{{items}}})'


def new_table(comparer: EqualityComparer):
    """Create an empty table honoring comparer; a plain dict for the default."""
    if is_default(comparer):
        return {}
    return ComparerTable(comparer)
