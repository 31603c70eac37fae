#!/usr/bin/env python3
"""
Comparative Performance Test: pymultikey vs pyrsistent

Compares MultiKeyDictionary with a nested pyrsistent PMap (a pmap of pmaps,
keyed by major key, then minor key), the closest immutable equivalent of a
two-level keyed dictionary.

pyrsistent pays for immutability on every write, so the interesting numbers
are the read side (lookup, row query, iteration) where both are plain hash
table walks.

Note: pyrsistent 0.20.0 removed C extensions and is pure Python.
"""

import time
import statistics
from typing import Callable

from pymultikey import MultiKeyDictionary

# pyrsistent library
from pyrsistent import pmap, PMap


def robust_timer(func: Callable, runs: int = 7) -> tuple:
    """
    Run function multiple times and return robust statistics.
    Returns (median, cv_percent, min, max)
    """
    times = []
    for _ in range(runs):
        start = time.perf_counter()
        func()
        elapsed = time.perf_counter() - start
        times.append(elapsed)

    median_time = statistics.median(times)
    mean_time = statistics.mean(times)
    std_dev = statistics.stdev(times) if len(times) > 1 else 0
    cv = (std_dev / mean_time * 100) if mean_time > 0 else 0

    return median_time, cv, min(times), max(times)


def format_time(seconds: float) -> str:
    """Format time in appropriate units"""
    if seconds < 1e-6:
        return f"{seconds * 1e9:.2f} ns"
    elif seconds < 1e-3:
        return f"{seconds * 1e6:.2f} µs"
    elif seconds < 1:
        return f"{seconds * 1e3:.2f} ms"
    else:
        return f"{seconds:.2f} s"


def print_section(title: str):
    """Print section header"""
    print()
    print("=" * 70)
    print(title)
    print("=" * 70)
    print()


def print_result(our: tuple, pyr: tuple):
    """Print both timings and the speedup of pymultikey over pyrsistent."""
    our_median, our_cv = our[0], our[1]
    pyr_median, pyr_cv = pyr[0], pyr[1]
    ratio = pyr_median / our_median if our_median > 0 else 0

    print(f"pymultikey (mutable):   {format_time(our_median)} (±{our_cv:.1f}%)")
    print(f"pyrsistent (nested):    {format_time(pyr_median)} (±{pyr_cv:.1f}%)")

    if ratio > 1:
        print(f"Speedup:                {ratio:.2f}x faster")
    elif ratio > 0:
        print(f"Speedup:                {1/ratio:.2f}x slower")
    print()


def grid(rows: int, cols: int) -> dict:
    return {(x, y): x * cols + y for x in range(rows) for y in range(cols)}


def nested_pmap(data: dict) -> PMap:
    """Build a pmap of pmaps from a tuple-keyed dict."""
    rows = {}
    for (x, y), value in data.items():
        rows.setdefault(x, {})[y] = value
    return pmap({x: pmap(row) for x, row in rows.items()})


def compare_from_dict(rows: int, cols: int):
    """Compare bulk construction from a tuple-keyed dict"""
    data = grid(rows, cols)

    print(f"=== Bulk Construction ({rows:,} x {cols:,}) ===")

    our = robust_timer(lambda: MultiKeyDictionary.from_dict(data))
    pyr = robust_timer(lambda: nested_pmap(data))

    print_result(our, pyr)


def compare_lookup(rows: int, cols: int):
    """Compare single-key lookup performance"""
    data = grid(rows, cols)
    our_map = MultiKeyDictionary.from_dict(data)
    pyr_map = nested_pmap(data)

    keys = list(data)
    lookup_keys = keys[::max(1, len(keys) // 1000)]  # Sample 1000 keys

    print(f"=== Lookup Test ({rows:,} x {cols:,}, {len(lookup_keys)} lookups) ===")

    def our_lookup():
        for x, y in lookup_keys:
            _ = our_map.try_get_value(x, y)

    def pyr_lookup():
        for x, y in lookup_keys:
            _ = pyr_map[x].get(y)

    print_result(robust_timer(our_lookup), robust_timer(pyr_lookup))


def compare_row_query(rows: int, cols: int):
    """Compare fetching every entry of each major key"""
    data = grid(rows, cols)
    our_map = MultiKeyDictionary.from_dict(data)
    pyr_map = nested_pmap(data)

    print(f"=== Row Query Test ({rows:,} rows of {cols:,}) ===")

    def our_rows():
        for x in range(rows):
            our_map.query_values_with_major_key(x)

    def pyr_rows():
        for x in range(rows):
            [((x, y), v) for y, v in pyr_map[x].items()]

    print_result(robust_timer(our_rows), robust_timer(pyr_rows))


def compare_update(rows: int, cols: int):
    """Compare overwriting existing entries"""
    data = grid(rows, cols)
    updates = list(data)[::max(1, len(data) // 100)]  # 100 updates

    print(f"=== Update Test ({rows:,} x {cols:,}, {len(updates)} updates) ===")

    our_map = MultiKeyDictionary.from_dict(data)
    pyr_map = nested_pmap(data)

    def our_update():
        for x, y in updates:
            our_map.set(x, y, -1)

    def pyr_update():
        m = pyr_map
        for x, y in updates:
            m = m.set(x, m[x].set(y, -1))

    print_result(robust_timer(our_update), robust_timer(pyr_update))


def compare_iteration(rows: int, cols: int):
    """Compare full iteration performance"""
    data = grid(rows, cols)
    our_map = MultiKeyDictionary.from_dict(data)
    pyr_map = nested_pmap(data)

    print(f"=== Iteration Test ({rows:,} x {cols:,}) ===")

    def our_iter():
        for key, value in our_map.items():
            pass

    def pyr_iter():
        for x, row in pyr_map.items():
            for y, value in row.items():
                pass

    print_result(robust_timer(our_iter), robust_timer(pyr_iter))


def compare_clear_rows(rows: int, cols: int):
    """Compare dropping every major key one at a time"""
    data = grid(rows, cols)

    print(f"=== Clear Rows Test ({rows:,} rows) ===")

    def our_clear():
        m = MultiKeyDictionary.from_dict(data)
        for x in range(rows):
            m.clear_major_keys(x)

    def pyr_clear():
        m = nested_pmap(data)
        for x in range(rows):
            m = m.discard(x)

    print_result(robust_timer(our_clear, runs=3), robust_timer(pyr_clear, runs=3))


def main():
    print_section("PYMULTIKEY vs PYRSISTENT - PERFORMANCE COMPARISON")
    print("pymultikey: Mutable two-level dictionary with pooled inner tables")
    print("pyrsistent: Nested immutable PMap (v0.20.0, no C extensions)")
    print()

    test_shapes = [(10, 10), (100, 100), (1_000, 100)]

    for rows, cols in test_shapes:
        print_section(f"TESTING WITH {rows:,} x {cols:,} = {rows * cols:,} ELEMENTS")
        compare_from_dict(rows, cols)
        compare_lookup(rows, cols)
        compare_row_query(rows, cols)
        compare_update(rows, cols)
        compare_iteration(rows, cols)
        compare_clear_rows(rows, cols)

    print_section("SUMMARY")
    print("pymultikey is:")
    print("  - Mutable: writes happen in place, no path copying")
    print("  - Pooled: emptied rows are recycled for new major keys")
    print("  - Fail-fast: mutating during iteration raises")
    print()
    print("pyrsistent is:")
    print("  - Immutable: every version stays valid and shareable")
    print("  - Safe to iterate while producing new versions")
    print()
    print("Use pymultikey when:")
    print("  - One owner mutates the table in a hot loop")
    print("  - Rows are queried, cleared and refilled often")
    print()
    print("Use pyrsistent when:")
    print("  - Old versions must stay readable")
    print("  - The table is shared between threads or undo stacks")


if __name__ == "__main__":
    main()
