"""
Test suite for the CPMM calculator

Contains:
- tests/unit/          : Unit tests for individual modules
"""
