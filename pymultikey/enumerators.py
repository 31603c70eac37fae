"""
Enumerators over a MultiKeyDictionary.

All enumerators are single pass and pull based: move_next() advances and
reports whether an element is available, ``current`` holds it. They also
implement the Python iterator protocol, so they can be used in a for loop.

Every advance compares the version captured at construction with the
dictionary's current version and raises CollectionModifiedError if the
dictionary was mutated in between.
"""

from typing import Any, Optional, Tuple

from .errors import CollectionModifiedError, InvalidStateError
from .multi_key import MultiKey

_END = object()


class _BaseEnumerator:

    __slots__ = ()

    @property
    def current(self) -> Optional[Tuple[Any, Any]]:
        """The element produced by the last successful move_next(), else None."""
        return self._current

    def move_next(self) -> bool:
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError

    def __iter__(self):
        return self

    def __next__(self) -> Tuple[Any, Any]:
        if self.move_next():
            return self._current
        raise StopIteration


class Enumerator(_BaseEnumerator):
    """
    Full traversal yielding (MultiKey, value) pairs.

    Walks the outer table with one cursor and the inner table of the current
    major key with another, flattening both levels into one sequence. Order
    follows the insertion order of the underlying tables.
    """

    __slots__ = ('_dictionary', '_version', '_table_iter', '_major',
                 '_inner_iter', '_current', '_finished')

    def __init__(self, dictionary):
        self._dictionary = dictionary
        self._version = dictionary._version
        self._start()

    def _start(self) -> None:
        self._table_iter = iter(self._dictionary._table.items())
        self._major = None
        self._inner_iter = None
        self._current = None
        self._finished = False

    def move_next(self) -> bool:
        self._check_version()

        if self._finished:
            return False

        if self._inner_iter is not None:
            entry = next(self._inner_iter, _END)
            if entry is not _END:
                self._set_current(entry)
                return True
            # Current inner table exhausted, continue with the next major key
            self._inner_iter = None

        return self._advance_table()

    def reset(self) -> None:
        """Rewind to the start. Raises if the dictionary changed meanwhile."""
        self._check_version()
        self._start()

    def _advance_table(self) -> bool:
        entry = next(self._table_iter, _END)
        if entry is _END:
            self._table_iter = None
            self._major = None
            self._current = None
            self._finished = True
            return False

        major, table = entry
        inner_iter = iter(table.items())
        first = next(inner_iter, _END)
        if first is _END:
            # Empty inner tables are pooled on removal, never left reachable
            raise InvalidStateError(f'Major key {major!r} has no minor keys')

        self._major = major
        self._inner_iter = inner_iter
        self._set_current(first)
        return True

    def _set_current(self, entry: Tuple[Any, Any]) -> None:
        minor, value = entry
        self._current = (MultiKey(self._major, minor), value)

    def _check_version(self) -> None:
        if self._version != self._dictionary._version:
            raise CollectionModifiedError()


class MajorKeyValueEnumerator(_BaseEnumerator):
    """
    Yields (major, value) for every entry whose minor key matches a fixed minor.

    There is no reverse index from minor keys to major keys, so this filters
    a full traversal using the dictionary's minor key comparer.
    """

    __slots__ = ('_dictionary', '_enumerator', '_minor', '_current')

    def __init__(self, dictionary, minor: Any):
        self._dictionary = dictionary
        self._enumerator = dictionary.get_enumerator()
        self._minor = minor
        self._current = None

    @property
    def minor(self) -> Any:
        return self._minor

    def move_next(self) -> bool:
        comparer = self._dictionary.minor_key_comparer
        enumerator = self._enumerator

        while enumerator.move_next():
            key, value = enumerator.current
            if comparer.equals(key.minor, self._minor):
                self._current = (key.major, value)
                return True

        self._current = None
        return False

    def reset(self) -> None:
        self._enumerator.reset()
        self._current = None


class MinorKeyValueEnumerator(_BaseEnumerator):
    """
    Yields (minor, value) for every entry stored under a fixed major key.

    Opens the major key's inner table directly. If the major key is absent the
    enumerator is exhausted from the start.
    """

    __slots__ = ('_dictionary', '_major', '_version', '_inner_iter', '_current')

    def __init__(self, dictionary, major: Any):
        self._dictionary = dictionary
        self._major = major
        self._open()

    @property
    def major(self) -> Any:
        return self._major

    def _open(self) -> None:
        self._version = self._dictionary._version
        self._current = None

        table = None
        if self._major is not None:
            table = self._dictionary._table.get(self._major)
        self._inner_iter = None if table is None else iter(table.items())

    def move_next(self) -> bool:
        if self._version != self._dictionary._version:
            raise CollectionModifiedError()

        if self._inner_iter is None:
            return False

        entry = next(self._inner_iter, _END)
        if entry is _END:
            self._inner_iter = None
            self._current = None
            return False

        self._current = tuple(entry)
        return True

    def reset(self) -> None:
        """Re-resolve the major key; it may have been removed and re-added."""
        self._open()
