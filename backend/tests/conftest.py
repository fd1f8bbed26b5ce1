"""Shared fixtures for the test suite."""

import pytest
from mongomock_motor import AsyncMongoMockClient


@pytest.fixture
def db():
    """Fresh mongomock-backed Motor database per test."""
    return AsyncMongoMockClient()["recipes_test"]
