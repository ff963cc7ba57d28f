"""Shared pytest fixtures for test modules."""

import sqlite3
from collections.abc import Iterator

import pytest

from playoff_pool.db.connection import create_connection


@pytest.fixture
def conn() -> Iterator[sqlite3.Connection]:
    connection = create_connection(":memory:")
    yield connection
    connection.close()
