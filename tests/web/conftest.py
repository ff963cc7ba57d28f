import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest
from flask import Flask
from flask.testing import FlaskClient

from playoff_pool.config import PoolSettings
from playoff_pool.db.connection import create_connection
from playoff_pool.db.pool import ConnectionPool
from playoff_pool.web.app import ADMIN_HEADER, create_app

ADMIN_TOKEN = "let-me-in"
ADMIN = {ADMIN_HEADER: ADMIN_TOKEN}


@pytest.fixture
def settings(tmp_path: Path) -> PoolSettings:
    return PoolSettings(
        data_dir=tmp_path,
        admin_token=ADMIN_TOKEN,
        default_rounds=2,
        espn_base_url="https://espn.test/nfl",
        sleeper_base_url="https://sleeper.test/v1",
        sleeper_projections_url="https://sleeper.test/projections/nfl",
        http_timeout=1.0,
        server_host="127.0.0.1",
        server_port=5000,
        server_pool_size=2,
    )


@pytest.fixture
def db(settings: PoolSettings) -> Iterator[sqlite3.Connection]:
    """A direct connection to the app's database for seeding and inspection."""
    connection = create_connection(settings.db_path)
    yield connection
    connection.close()


@pytest.fixture
def app(settings: PoolSettings, db: sqlite3.Connection) -> Iterator[Flask]:
    pool = ConnectionPool(settings.db_path, size=settings.server_pool_size)
    app = create_app(pool, settings)
    app.config["TESTING"] = True
    yield app
    pool.close_all()


@pytest.fixture
def client(app: Flask) -> FlaskClient:
    return app.test_client()
