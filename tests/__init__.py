"""
Test suite for multikeypair

Contains:
- tests/unit/          : Unit tests for individual modules
"""
