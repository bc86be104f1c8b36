"""Fuzz testing infrastructure for fakerengine.

This package contains:
- test_session_oracle: State machine running two identically seeded
  sessions side by side
- test_evaluation_fuzz: Arbitrary templates evaluated against the fixture
  locales

Python 3.13+.
"""
