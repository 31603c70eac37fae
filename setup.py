"""
Setup script for the pymultikey package.

Install with: pip install .
Develop with: pip install -e .[test]
Create wheel: python setup.py bdist_wheel
"""

from setuptools import setup

long_description = """
PyMultiKey - Two-Level Keyed Dictionary
=======================================

A mutable "dictionary of dictionaries" keyed by (major, minor) pairs, for
data indexed by two coordinates such as tile grids or per-object/per-pass
resource tables.

Features:
- O(1) lookup, insert and remove by composite key
- O(1) per-major-key counts, queries and clears
- Minor-key queries and clears across all major keys
- Pooled inner tables: emptied rows are recycled, not reallocated
- Fail-fast iteration: mutating during enumeration raises
- Pluggable equality for major keys, minor keys and values

Example:
    from pymultikey import MultiKeyDictionary

    d = MultiKeyDictionary()
    d.add(1, 'a', 100)
    d[1, 'b'] = 200
    d.query_minor_key_count(1)  # 2
    found, entries = d.query_values_with_minor_key('a')
"""

setup(
    name="pymultikey",
    version="1.0.0",
    author="Clemens Marschner",
    author_email="mail@cmarschner.net",
    description="Two-level (major, minor) keyed dictionary with pooled inner tables and fail-fast iteration",
    long_description=long_description,
    long_description_content_type="text/plain",
    packages=["pymultikey"],
    python_requires=">=3.7",
    install_requires=[],
    extras_require={
        "test": ["pytest>=7.0"],
        "bench": ["pyrsistent>=0.20.0"],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.7",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    zip_safe=False,
)
