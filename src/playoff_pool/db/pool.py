import logging
import queue
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from playoff_pool.db.connection import create_connection

logger = logging.getLogger(__name__)


class ConnectionPool:
    """Thread-safe pool of SQLite connections for the web server.

    Connections are opened lazily up to ``size``; once that many are checked
    out, callers block on the queue until one is released.
    """

    def __init__(self, path: str | Path, *, size: int = 5) -> None:
        if size < 1:
            raise ValueError("Pool size must be at least 1")
        logger.debug("Creating connection pool for %s: size=%d", path, size)
        self._path = path
        self._size = size
        self._closed = False
        self._lock = threading.Lock()
        self._all_conns: list[sqlite3.Connection] = []
        self._idle: queue.Queue[sqlite3.Connection] = queue.Queue(maxsize=size)

    @property
    def size(self) -> int:
        return self._size

    def get(self, *, timeout: float | None = None) -> sqlite3.Connection:
        """Check out a connection, opening a new one while under capacity.

        Raises RuntimeError if the pool is closed.
        Raises TimeoutError if no connection is available within timeout.
        """
        if self._closed:
            raise RuntimeError("Connection pool is closed")
        try:
            return self._idle.get_nowait()
        except queue.Empty:
            pass
        with self._lock:
            if len(self._all_conns) < self._size:
                conn = create_connection(self._path, check_same_thread=False)
                self._all_conns.append(conn)
                return conn
        try:
            return self._idle.get(timeout=timeout)
        except queue.Empty:
            logger.warning("Connection pool exhausted (%d in use)", self._size)
            raise TimeoutError("No connection available in pool")

    def release(self, conn: sqlite3.Connection) -> None:
        """Return a connection to the pool."""
        if self._closed:
            conn.close()
            return
        self._idle.put(conn)

    @contextmanager
    def connection(self) -> Iterator[sqlite3.Connection]:
        """Check out a connection for the duration of the block.

        Anything left uncommitted when the block exits is rolled back.
        """
        conn = self.get()
        try:
            yield conn
        finally:
            conn.rollback()
            self.release(conn)

    def close_all(self) -> None:
        """Close every connection the pool has opened, including checked-out ones."""
        logger.debug("Closing %d pooled connections", len(self._all_conns))
        self._closed = True
        with self._lock:
            for conn in self._all_conns:
                conn.close()
            self._all_conns.clear()
        while not self._idle.empty():
            try:
                self._idle.get_nowait()
            except queue.Empty:
                break
