"""
Two-dimensional composite key with a "major" and a "minor" component.
"""

from typing import Any, NamedTuple, Tuple


class MultiKey(NamedTuple):
    """
    A (major, minor) key pair.

    Being a tuple, a MultiKey compares and hashes equal to the plain 2-tuple
    with the same components, so ``d[1, 'a']`` and ``d[MultiKey(1, 'a')]``
    address the same entry.
    """

    major: Any
    minor: Any

    def __str__(self) -> str:
        major = 'NULL' if self.major is None else str(self.major)
        minor = 'NULL' if self.minor is None else str(self.minor)
        return f'[{major},{minor}]'


def as_multi_key(key: Any) -> MultiKey:
    """Coerce a MultiKey or any 2-item tuple into a MultiKey."""
    if isinstance(key, MultiKey):
        return key
    if isinstance(key, tuple) and len(key) == 2:
        return MultiKey(key[0], key[1])
    raise TypeError(f'Expected a (major, minor) pair, got {key!r}')


def split_key(key: Any) -> Tuple[Any, Any]:
    """Return the (major, minor) components of a composite key."""
    key = as_multi_key(key)
    return key.major, key.minor
