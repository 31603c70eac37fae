"""
A mutable dictionary keyed by two-dimensional (major, minor) keys.

MultiKeyDictionary is a "dictionary of dictionaries": an outer table maps each
major key to an inner table that maps minor keys to values. Lookups stay O(1)
while whole rows (all entries of one major key) can be queried, enumerated or
cleared without scanning the rest of the dictionary. A typical use is a 2D
tile grid keyed by (x, y), or per-object/per-pass resource lookups.

Inner tables that become empty are detached and kept in a free list, so a
remove/re-add cycle on the same or another major key reuses them instead of
allocating new ones.

Example:
    d = MultiKeyDictionary()
    d.add(1, 'a', 100)
    d[1, 'b'] = 200
    d.query_minor_key_count(1)   # 2
    for (major, minor), value in d.items():
        ...
"""

import enum
from collections import deque
from collections.abc import MutableMapping
from typing import Any, List, Optional, Tuple

from .comparers import EqualityComparer, is_default, new_table, resolve_comparer
from .enumerators import Enumerator, MajorKeyValueEnumerator, MinorKeyValueEnumerator
from .errors import DuplicateKeyError, InvalidKeyError, KeyNotFoundError
from .multi_key import MultiKey, split_key
from .views import KeyCollection, ValueCollection, check_copy_args


class InsertBehavior(enum.Enum):
    """Whether an insert must create a new entry or may replace an existing one."""

    ADD = 'add'
    OVERWRITE = 'overwrite'


def _is_pair(key: Any) -> bool:
    return isinstance(key, tuple) and len(key) == 2


class MultiKeyDictionary(MutableMapping):
    """
    Mutable mapping from (major, minor) keys to values.

    Besides the regular mapping protocol (keyed by MultiKey or any 2-tuple)
    it offers per-axis queries, per-axis clears and fail-fast enumerators.
    None is not a valid key component; looking it up is a no-op that reports
    "not found".

    Not thread-safe. Mutating the dictionary while iterating it makes the
    iterator's next advance raise CollectionModifiedError.
    """

    __slots__ = ('_table', '_free_tables', '_count', '_version',
                 '_major_comparer', '_minor_comparer', '_value_comparer',
                 '_keys', '_values', '_emptied_major_keys')

    def __init__(self, source=None, capacity: Optional[int] = None,
                 major_comparer: Optional[EqualityComparer] = None,
                 minor_comparer: Optional[EqualityComparer] = None,
                 value_comparer: Optional[EqualityComparer] = None):
        """
        Args:
            source: Optional mapping or iterable of (key, value) pairs to copy.
                Every pair is added as if by add_key(), so duplicate keys raise.
            capacity: Number of inner tables to allocate up front. Defaults to
                the major key count of a MultiKeyDictionary source, or the size
                of any other sized source.
            major_comparer: Equality strategy for major keys.
            minor_comparer: Equality strategy for minor keys.
            value_comparer: Equality strategy for contains_value().
        """
        if capacity is not None and capacity < 0:
            raise ValueError(f'capacity must be non-negative, got {capacity}')

        self._major_comparer = resolve_comparer(major_comparer)
        self._minor_comparer = resolve_comparer(minor_comparer)
        self._value_comparer = resolve_comparer(value_comparer)
        self._table = new_table(self._major_comparer)
        self._free_tables = deque()
        self._count = 0
        self._version = 0
        self._keys = None
        self._values = None
        self._emptied_major_keys = None

        hint = capacity if capacity is not None else self._capacity_from_source(source)
        for _ in range(hint):
            self._free_tables.append(new_table(self._minor_comparer))

        if source is not None:
            pairs = source.items() if hasattr(source, 'items') else source
            for key, value in pairs:
                major, minor = split_key(key)
                self._insert(major, minor, value, InsertBehavior.ADD)

            # Seeding is not observable as a mutation
            self._version = 0

            if capacity is None:
                # A size-derived hint over-counts the major keys of a flat source
                self._free_tables.clear()

    @staticmethod
    def from_dict(d, **kwargs) -> 'MultiKeyDictionary':
        """Create a MultiKeyDictionary from a dict keyed by (major, minor) tuples."""
        return MultiKeyDictionary(d, **kwargs)

    @staticmethod
    def _capacity_from_source(source) -> int:
        if isinstance(source, MultiKeyDictionary):
            return source.major_key_count
        if source is not None and hasattr(source, '__len__'):
            return len(source)
        return 0

    # -- properties -----------------------------------------------------------

    @property
    def count(self) -> int:
        """Total number of (major, minor) keys."""
        return self._count

    @property
    def major_key_count(self) -> int:
        """Number of distinct major keys."""
        return len(self._table)

    @property
    def version(self) -> int:
        """Counter bumped on every mutation; used to invalidate enumerators."""
        return self._version

    @property
    def free_table_count(self) -> int:
        """Number of empty inner tables waiting in the free list."""
        return len(self._free_tables)

    @property
    def major_key_comparer(self) -> EqualityComparer:
        return self._major_comparer

    @property
    def minor_key_comparer(self) -> EqualityComparer:
        return self._minor_comparer

    @property
    def value_comparer(self) -> EqualityComparer:
        return self._value_comparer

    @property
    def is_read_only(self) -> bool:
        return False

    # -- lookup ---------------------------------------------------------------

    def try_get_value(self, major: Any, minor: Any) -> Tuple[bool, Any]:
        """Return (True, value) if (major, minor) is present, else (False, None)."""
        if major is None or minor is None:
            return False, None

        table = self._table.get(major)
        if table is None or minor not in table:
            return False, None
        return True, table[minor]

    def __getitem__(self, key: Any) -> Any:
        """Get the value for a composite key. Raises KeyNotFoundError if absent."""
        major, minor = split_key(key)
        found, value = self.try_get_value(major, minor)
        if not found:
            raise KeyNotFoundError(key)
        return value

    def __setitem__(self, key: Any, value: Any) -> None:
        major, minor = split_key(key)
        self._insert(major, minor, value, InsertBehavior.OVERWRITE)

    def __delitem__(self, key: Any) -> None:
        if not self.remove_key(key):
            raise KeyNotFoundError(key)

    def __contains__(self, key: Any) -> bool:
        if not _is_pair(key):
            return False
        return self.contains_key(key[0], key[1])

    def __len__(self) -> int:
        return self._count

    def __iter__(self):
        return iter(self.keys())

    # -- insertion ------------------------------------------------------------

    def add(self, major: Any, minor: Any, value: Any) -> None:
        """Add a new entry. Raises DuplicateKeyError if (major, minor) exists."""
        self._insert(major, minor, value, InsertBehavior.ADD)

    def add_key(self, key: Any, value: Any) -> None:
        """Like add(), taking a composite key."""
        major, minor = split_key(key)
        self._insert(major, minor, value, InsertBehavior.ADD)

    def set(self, major: Any, minor: Any, value: Any) -> None:
        """Add or replace the value stored at (major, minor)."""
        self._insert(major, minor, value, InsertBehavior.OVERWRITE)

    def _insert(self, major: Any, minor: Any, value: Any, behavior: InsertBehavior) -> None:
        if major is None or minor is None:
            raise InvalidKeyError(f'Key components must not be None: {MultiKey(major, minor)}')

        table = self._table.get(major)

        if table is None:
            # Attach only once the write cannot fail, so no empty table stays reachable
            table = self._next_free_table()
            table[minor] = value
            self._table[major] = table
            self._count += 1
        else:
            if behavior is InsertBehavior.ADD and minor in table:
                raise DuplicateKeyError(MultiKey(major, minor))

            prev_count = len(table)
            table[minor] = value
            if len(table) != prev_count:
                self._count += 1

        self._version += 1

    # -- removal --------------------------------------------------------------

    def remove(self, major: Any, minor: Any) -> bool:
        """Remove (major, minor). Returns False if it was not present."""
        if major is None or minor is None:
            return False

        table = self._table.get(major)
        if table is None or minor not in table:
            return False

        del table[minor]
        self._count -= 1
        self._version += 1

        # Last minor key gone: detach the inner table and keep it for reuse
        if not table:
            del self._table[major]
            self._free_table(table)

        return True

    def remove_key(self, key: Any) -> bool:
        """Like remove(), taking a composite key."""
        major, minor = split_key(key)
        return self.remove(major, minor)

    def remove_item(self, key: Any, value: Any) -> bool:
        """Remove key only if it currently maps to value."""
        if not self.contains_item(key, value):
            return False
        return self.remove_key(key)

    def clear(self) -> None:
        """Remove every entry, returning all inner tables to the free list."""
        for table in self._table.values():
            self._free_table(table)

        self._table.clear()
        self._count = 0
        self._version += 1

    def clear_major_keys(self, major: Any) -> None:
        """Remove every entry stored under major."""
        if major is None:
            return

        table = self._table.pop(major, None)
        if table is None:
            return

        self._count -= len(table)
        self._free_table(table)
        self._version += 1

    def clear_minor_keys(self, minor: Any) -> None:
        """
        Remove every entry whose minor key is minor, across all major keys.

        O(number of major keys): there is no index from minor keys back to the
        major keys that use them.
        """
        if minor is None or not self._table:
            return

        if self._emptied_major_keys is None:
            self._emptied_major_keys = []
        emptied = self._emptied_major_keys

        removed = 0
        for major, table in self._table.items():
            if minor in table:
                del table[minor]
                removed += 1
                if not table:
                    emptied.append(major)

        for major in emptied:
            self._free_table(self._table.pop(major))
        emptied.clear()

        if removed:
            self._count -= removed
            self._version += 1

    # -- membership and counts ------------------------------------------------

    def contains_key(self, major: Any, minor: Any) -> bool:
        if major is None or minor is None:
            return False

        table = self._table.get(major)
        return table is not None and minor in table

    def contains_value(self, value: Any) -> bool:
        """Linear scan for value using the value comparer."""
        if is_default(self._value_comparer):
            return any(value in table.values() for table in self._table.values())

        equals = self._value_comparer.equals
        for table in self._table.values():
            for stored in table.values():
                if equals(stored, value):
                    return True
        return False

    def contains_item(self, key: Any, value: Any) -> bool:
        """True if key is present and maps to a value equal to value."""
        major, minor = split_key(key)
        found, stored = self.try_get_value(major, minor)
        return found and self._value_comparer.equals(stored, value)

    def query_major_key_count(self, minor: Any) -> int:
        """Number of major keys that have an entry for minor. O(major keys)."""
        if minor is None or not self._table:
            return 0
        return sum(1 for table in self._table.values() if minor in table)

    def query_minor_key_count(self, major: Any) -> int:
        """Number of minor keys stored under major."""
        if major is None or not self._table:
            return 0

        table = self._table.get(major)
        return 0 if table is None else len(table)

    # -- per-axis retrieval ---------------------------------------------------

    def query_values_with_major_key(self, major: Any,
                                    results: Optional[List[Tuple[MultiKey, Any]]] = None
                                    ) -> Tuple[bool, List[Tuple[MultiKey, Any]]]:
        """
        Collect every (MultiKey, value) stored under major.

        Entries are appended to results if given, otherwise to a new list.
        Returns (found_any, results).
        """
        if results is None:
            results = []

        if major is None or not self._table:
            return False, results

        found = False
        for minor, value in self.get_minor_key_value_enumerator(major):
            found = True
            results.append((MultiKey(major, minor), value))

        return found, results

    def query_values_with_minor_key(self, minor: Any,
                                    results: Optional[List[Tuple[MultiKey, Any]]] = None
                                    ) -> Tuple[bool, List[Tuple[MultiKey, Any]]]:
        """
        Collect every (MultiKey, value) whose minor key is minor.

        Scans all major keys. Entries are appended to results if given,
        otherwise to a new list. Returns (found_any, results).
        """
        if results is None:
            results = []

        if minor is None or not self._table:
            return False, results

        found = False
        for major, value in self.get_major_key_value_enumerator(minor):
            found = True
            results.append((MultiKey(major, minor), value))

        return found, results

    # -- enumeration ----------------------------------------------------------

    def get_enumerator(self) -> Enumerator:
        """Full traversal over (MultiKey, value) pairs."""
        return Enumerator(self)

    def get_major_key_value_enumerator(self, minor: Any) -> MajorKeyValueEnumerator:
        """Enumerate (major, value) pairs of every entry with the given minor key."""
        return MajorKeyValueEnumerator(self, minor)

    def get_minor_key_value_enumerator(self, major: Any) -> MinorKeyValueEnumerator:
        """Enumerate (minor, value) pairs of every entry under the given major key."""
        return MinorKeyValueEnumerator(self, major)

    def items(self) -> Enumerator:
        """Iterate over (MultiKey, value) pairs."""
        return Enumerator(self)

    def keys(self) -> KeyCollection:
        if self._keys is None:
            self._keys = KeyCollection(self)
        return self._keys

    def values(self) -> ValueCollection:
        if self._values is None:
            self._values = ValueCollection(self)
        return self._values

    def copy_to(self, buffer: List[Any], index: int = 0) -> None:
        """Write every (MultiKey, value) pair into buffer starting at index."""
        check_copy_args(buffer, index, self._count)

        i = index
        for major, table in self._table.items():
            for minor, value in table.items():
                buffer[i] = (MultiKey(major, minor), value)
                i += 1

    # -- free list ------------------------------------------------------------

    def _next_free_table(self):
        if self._free_tables:
            return self._free_tables.popleft()
        return new_table(self._minor_comparer)

    def _free_table(self, table) -> None:
        table.clear()
        self._free_tables.append(table)

    def __repr__(self) -> str:
        items = ', '.join(f'{key}: {value!r}' for key, value in self.items())
        return f'MultiKeyDictionary({{{items}}})'

