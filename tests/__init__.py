"""
Test suite for tagformula

Contains:
- tests/unit/          : Unit tests for individual modules and the session pipeline
"""
