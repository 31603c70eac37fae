"""
Property-based integrity tests for MultiKeyDictionary.

Tests verify correctness by performing operations on both MultiKeyDictionary
and a Python dict keyed by (major, minor) tuples in parallel, then comparing
results and checking the structural invariants after every step:

- every reachable inner table is non-empty
- every pooled inner table is empty
- the total count equals the sum of the inner table sizes
- the version moves on every mutation and only on mutations
"""

import random

import pytest
from pymultikey import DuplicateKeyError, MultiKeyDictionary


def _assert_maps_equal(mk_dict, pydict, msg=""):
    """Assert MultiKeyDictionary and dict have identical contents."""
    mk_contents = dict(mk_dict.items())
    assert mk_contents == pydict, f"{msg}\nMultiKeyDictionary: {mk_contents}\nPython dict: {pydict}"
    assert len(mk_dict) == len(pydict), f"{msg}\nLength mismatch"
    assert mk_dict.major_key_count == len({major for major, _ in pydict}), f"{msg}\nMajor key count mismatch"


def _assert_invariants(mk_dict, msg=""):
    """Assert the internal table/pool invariants."""
    inner_tables = list(mk_dict._table.values())
    assert all(len(table) > 0 for table in inner_tables), f"{msg}\nEmpty inner table reachable"
    assert all(len(table) == 0 for table in mk_dict._free_tables), f"{msg}\nNon-empty pooled table"
    assert sum(len(table) for table in inner_tables) == len(mk_dict), f"{msg}\nCount drift"

    pooled_ids = {id(table) for table in mk_dict._free_tables}
    assert not pooled_ids & {id(table) for table in inner_tables}, f"{msg}\nTable both pooled and reachable"


class TestIntegrityBasic:
    """Basic integrity tests comparing MultiKeyDictionary to dict."""

    def test_multiple_add(self):
        """Test filling a grid."""
        mk_dict = MultiKeyDictionary()
        pydict = {}

        for x in range(20):
            for y in range(20):
                mk_dict.add(x, y, x * y)
                pydict[(x, y)] = x * y

        _assert_maps_equal(mk_dict, pydict, "After 400 add operations")
        _assert_invariants(mk_dict)

    def test_set_update(self):
        """Test overwriting existing keys."""
        mk_dict = MultiKeyDictionary()
        pydict = {}

        for i in range(100):
            mk_dict.set(i % 10, i, i)
            pydict[(i % 10, i)] = i

        for i in range(0, 100, 2):
            mk_dict[i % 10, i] = i * 100
            pydict[(i % 10, i)] = i * 100

        _assert_maps_equal(mk_dict, pydict, "After updates")
        _assert_invariants(mk_dict)

    def test_remove_every_third(self):
        """Test key removal, including draining whole rows."""
        mk_dict = MultiKeyDictionary()
        pydict = {}

        for i in range(300):
            mk_dict.add(i % 7, i, f'v{i}')
            pydict[(i % 7, i)] = f'v{i}'

        for i in range(0, 300, 3):
            assert mk_dict.remove(i % 7, i)
            del pydict[(i % 7, i)]

        _assert_maps_equal(mk_dict, pydict, "After remove operations")
        _assert_invariants(mk_dict)

    def test_remove_nonexistent(self):
        """Test removing nonexistent keys (should be a no-op)."""
        mk_dict = MultiKeyDictionary()
        pydict = {}
        for i in range(10):
            mk_dict.add(i, -i, i)
            pydict[(i, -i)] = i

        version = mk_dict.version
        for i in range(100, 110):
            assert not mk_dict.remove(i, -i)
            assert not mk_dict.remove(0, i)

        assert mk_dict.version == version
        _assert_maps_equal(mk_dict, pydict, "After remove nonexistent")

    def test_from_dict(self):
        """Test creating from dict."""
        pydict = {(i // 10, i % 10): i for i in range(1000)}
        mk_dict = MultiKeyDictionary.from_dict(pydict)

        _assert_maps_equal(mk_dict, pydict, "After from_dict")
        _assert_invariants(mk_dict)


class TestIntegritySequences:
    """Test complex sequences of operations."""

    @pytest.mark.parametrize("seed", [0, 7, 42])
    def test_random_operations(self, seed):
        """Test random sequence of operations, checking invariants each step."""
        rng = random.Random(seed)  # Reproducible
        mk_dict = MultiKeyDictionary()
        pydict = {}

        ops = ['add', 'set', 'remove', 'remove', 'clear_major', 'clear_minor', 'clear']
        weights = [30, 20, 25, 10, 5, 5, 1]

        for step in range(2000):
            op = rng.choices(ops, weights)[0]
            major = rng.randint(0, 9)
            minor = rng.randint(0, 9)
            value = rng.randint(0, 1000)
            version = mk_dict.version
            mutated = True

            if op == 'add':
                if (major, minor) in pydict:
                    with pytest.raises(DuplicateKeyError):
                        mk_dict.add(major, minor, value)
                    mutated = False
                else:
                    mk_dict.add(major, minor, value)
                    pydict[(major, minor)] = value

            elif op == 'set':
                mk_dict.set(major, minor, value)
                pydict[(major, minor)] = value

            elif op == 'remove':
                expected = (major, minor) in pydict
                assert mk_dict.remove(major, minor) == expected
                pydict.pop((major, minor), None)
                mutated = expected

            elif op == 'clear_major':
                doomed = [key for key in pydict if key[0] == major]
                mk_dict.clear_major_keys(major)
                for key in doomed:
                    del pydict[key]
                mutated = bool(doomed)

            elif op == 'clear_minor':
                doomed = [key for key in pydict if key[1] == minor]
                mk_dict.clear_minor_keys(minor)
                for key in doomed:
                    del pydict[key]
                mutated = bool(doomed)

            elif op == 'clear':
                mk_dict.clear()
                pydict.clear()

            msg = f"Step {step}: {op}({major}, {minor})"
            if mutated:
                assert mk_dict.version > version, msg
            else:
                assert mk_dict.version == version, msg

            _assert_invariants(mk_dict, msg)

            if step % 50 == 0:
                _assert_maps_equal(mk_dict, pydict, msg)

        _assert_maps_equal(mk_dict, pydict, "After 2000 random operations")

    def test_row_churn_reuses_tables(self):
        """Draining and refilling rows never allocates beyond the peak row count."""
        mk_dict = MultiKeyDictionary()
        pydict = {}

        for rnd in range(20):
            for major in range(rnd * 5, rnd * 5 + 5):
                for minor in range(3):
                    mk_dict.add(major, minor, (rnd, major, minor))
                    pydict[(major, minor)] = (rnd, major, minor)

            _assert_maps_equal(mk_dict, pydict, f"Round {rnd} filled")

            for major in range(rnd * 5, rnd * 5 + 5):
                for minor in range(3):
                    mk_dict.remove(major, minor)
                    del pydict[(major, minor)]

            assert len(mk_dict) == 0
            assert mk_dict.free_table_count == 5
            _assert_invariants(mk_dict, f"Round {rnd} drained")

    def test_query_counts_match_reference(self):
        """Per-axis counts and queries agree with a brute force scan."""
        rng = random.Random(3)
        mk_dict = MultiKeyDictionary()
        pydict = {}

        for _ in range(500):
            key = (rng.randint(0, 15), rng.randint(0, 15))
            mk_dict[key] = key[0] - key[1]
            pydict[key] = key[0] - key[1]

        for axis_value in range(16):
            by_major = {k: v for k, v in pydict.items() if k[0] == axis_value}
            by_minor = {k: v for k, v in pydict.items() if k[1] == axis_value}

            assert mk_dict.query_minor_key_count(axis_value) == len(by_major)
            assert mk_dict.query_major_key_count(axis_value) == len(by_minor)

            found, rows = mk_dict.query_values_with_major_key(axis_value)
            assert found == bool(by_major)
            assert dict(rows) == by_major

            found, columns = mk_dict.query_values_with_minor_key(axis_value)
            assert found == bool(by_minor)
            assert dict(columns) == by_minor


class TestIntegrityEdgeCases:
    """Test edge cases and special values."""

    def test_mixed_key_types(self):
        """Test heterogeneous key types in both components."""
        mk_dict = MultiKeyDictionary()
        pydict = {}

        keys = [
            (1, 'a'),
            ('1', 1),
            (1.5, (2, 3)),
            (frozenset({1}), b'bytes'),
            ((0, 0), 0),
        ]
        for i, key in enumerate(keys):
            mk_dict.add_key(key, i)
            pydict[key] = i

        _assert_maps_equal(mk_dict, pydict, "After mixed types")

    def test_unicode_keys(self):
        """Test unicode keys."""
        pydict = {('层', 'キー'): 1, ('ключ', '🔑'): 2}
        mk_dict = MultiKeyDictionary.from_dict(pydict)

        _assert_maps_equal(mk_dict, pydict, "After unicode keys")

    def test_empty_strings(self):
        """Empty strings are valid key components, unlike None."""
        mk_dict = MultiKeyDictionary()
        mk_dict.add('', '', 'empty')

        assert mk_dict['', ''] == 'empty'
        assert mk_dict.query_minor_key_count('') == 1
