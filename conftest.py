"""
Pytest configuration and fixtures.
"""

import os
import sys

# Add app directory to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

# Set test environment
os.environ["TESTING"] = "1"
os.environ["SHEET_CACHE_SECONDS"] = "0"
os.environ["MILEAGE_GID"] = "555"

import pytest


@pytest.fixture(autouse=True)
def clear_sheet_cache():
    """Start every test with an empty sheet cache."""
    from sheets_client import clear_cache
    clear_cache()
    yield
    clear_cache()
