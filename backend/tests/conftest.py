"""Shared fixtures for detection tests."""

import pytest

from .factories import dataset, tx


@pytest.fixture
def scenario():
    """Small mixed dataset exercising every pass once."""
    return dataset(
        tx("t1", "alice", "bob", 15000.0, minutes=0),
        tx("t2", "carol", "dave", 1500.0, minutes=60),
        tx("t3", "carol", "dave", 50.0, minutes=120),
        tx("t4", "eve", "frank", 200.0, minutes=0),
        tx("t5", "eve", "frank", 200.0, minutes=5, payee_country="GB"),
    )
