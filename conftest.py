"""
Pytest configuration for Django tests with SQLite.

Uses SQLite in-memory database for fast testing - no Docker required.
"""

import os

# Set test settings module before importing Django
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "model_transformers.tests.settings")
