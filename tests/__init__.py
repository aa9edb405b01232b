#!/usr/bin/env python3
"""
Test suite for TELL Matching.

    # Run all tests
    python -m pytest tests/ -v

    # Only the scoring tests
    python -m pytest tests/unit/core/scorer -v

Database-backed tests use an in-memory SQLite database through SQLAlchemy
(see tests/fixtures/database.py), so no external service is needed.
"""
