"""
Test suite for compact-geometry

Contains:
- tests/unit/          : Unit tests for individual modules
"""
