"""
Integration test configuration.

These tests talk to a real MongoDB through PyMongo's GridFS bucket. They run
only when MONGODB_TEST_URI points at a reachable server.
"""

import os

import pytest

MONGODB_TEST_URI = os.getenv("MONGODB_TEST_URI", "")


@pytest.fixture(autouse=True)
def require_mongodb():
    if not MONGODB_TEST_URI:
        pytest.skip("MONGODB_TEST_URI is not set")
