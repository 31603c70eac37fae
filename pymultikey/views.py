"""
Read-only key and value collections of a MultiKeyDictionary.

Both hold nothing but a reference to the dictionary: iteration always starts a
fresh full traversal of it, so the same view object stays valid across
mutations of the dictionary.
"""

from collections.abc import Collection
from typing import Any, Iterator, List

from .errors import ReadOnlyCollectionError
from .multi_key import MultiKey, split_key


def check_copy_args(buffer: List[Any], index: int, count: int) -> None:
    """Validate a copy_to() destination before anything is written to it."""
    if buffer is None:
        raise TypeError('buffer must not be None')

    if index < 0 or index > len(buffer):
        raise IndexError('Index is out of range')

    if len(buffer) - index < count:
        raise ValueError('Buffer write overflow')


class _ReadOnlyView(Collection):

    __slots__ = ('_dictionary',)

    def __init__(self, dictionary):
        self._dictionary = dictionary

    def __len__(self) -> int:
        return len(self._dictionary)

    @property
    def is_read_only(self) -> bool:
        return True

    def copy_to(self, buffer: List[Any], index: int = 0) -> None:
        """Write every element into buffer starting at index."""
        check_copy_args(buffer, index, len(self._dictionary))
        for i, item in enumerate(self, index):
            buffer[i] = item

    def add(self, item: Any) -> None:
        raise ReadOnlyCollectionError()

    def remove(self, item: Any) -> None:
        raise ReadOnlyCollectionError()

    def discard(self, item: Any) -> None:
        raise ReadOnlyCollectionError()

    def clear(self) -> None:
        raise ReadOnlyCollectionError()

    def __repr__(self) -> str:
        return f'{type(self).__name__}([{", ".join(repr(item) for item in self)}])'


class KeyCollection(_ReadOnlyView):
    """The composite keys of a MultiKeyDictionary."""

    __slots__ = ()

    def __iter__(self) -> Iterator[MultiKey]:
        for key, _ in self._dictionary.get_enumerator():
            yield key

    def __contains__(self, key: Any) -> bool:
        if not isinstance(key, tuple) or len(key) != 2:
            return False
        major, minor = split_key(key)
        return self._dictionary.contains_key(major, minor)


class ValueCollection(_ReadOnlyView):
    """The values of a MultiKeyDictionary."""

    __slots__ = ()

    def __iter__(self) -> Iterator[Any]:
        for _, value in self._dictionary.get_enumerator():
            yield value

    def __contains__(self, value: Any) -> bool:
        return self._dictionary.contains_value(value)
