"""
Core geometric primitives, numerical safeguards, and invariants.

This module contains the foundational building blocks: vectors, point sets,
axis-aligned compacts with grid iterators, and the diagnostic logger they
report to.
"""
