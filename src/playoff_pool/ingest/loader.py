import dataclasses
import logging
import sqlite3
import time
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from playoff_pool.domain.errors import IngestError
from playoff_pool.domain.load_log import LoadLog
from playoff_pool.domain.result import Err, Ok, Result
from playoff_pool.ingest.protocols import DataSource
from playoff_pool.repos.protocols import LoadLogRepo

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class Loader:
    """Fetch rows from a source, map them, upsert them, and record a load_log row.

    Mapped rows are upserted in one transaction on ``conn``; a failure part way
    rolls the batch back. The load_log row is written either way.
    """

    def __init__(
        self,
        source: DataSource,
        repo: Any,
        load_log_repo: LoadLogRepo,
        row_mapper: Callable[[dict[str, Any]], Any | None],
        target_table: str,
        *,
        conn: sqlite3.Connection,
    ) -> None:
        self._source = source
        self._repo = repo
        self._load_log_repo = load_log_repo
        self._row_mapper = row_mapper
        self._target_table = target_table
        self._conn = conn

    def load(self, **fetch_params: Any) -> Result[LoadLog, IngestError]:
        started_at = _now()
        t0 = time.perf_counter()
        logger.info("Loading %s from %s", self._target_table, self._source.source_detail)

        try:
            rows = self._source.fetch(**fetch_params)
        except Exception as exc:
            logger.error("Fetch failed for %s: %s", self._target_table, exc)
            return self._fail(started_at, exc)

        logger.debug("Fetched %d rows from %s", len(rows), self._source.source_detail)

        rows_loaded = 0
        try:
            for row in rows:
                mapped = self._row_mapper(row)
                if mapped is None:
                    continue
                self._repo.upsert(mapped)
                rows_loaded += 1
            self._conn.commit()
        except Exception as exc:
            logger.error("Processing failed for %s after %d rows: %s", self._target_table, rows_loaded, exc)
            self._conn.rollback()
            return self._fail(started_at, exc)

        log = self._record(started_at, rows_loaded, "success")
        logger.info("Loaded %d rows into %s in %.1fs", rows_loaded, self._target_table, time.perf_counter() - t0)
        return Ok(log)

    def _fail(self, started_at: str, exc: Exception) -> Err[IngestError]:
        self._record(started_at, 0, "error", error_message=str(exc))
        return Err(
            IngestError(
                message=str(exc),
                source_type=self._source.source_type,
                source_detail=self._source.source_detail,
                target_table=self._target_table,
            )
        )

    def _record(self, started_at: str, rows_loaded: int, status: str, *, error_message: str | None = None) -> LoadLog:
        log = LoadLog(
            source_type=self._source.source_type,
            source_detail=self._source.source_detail,
            target_table=self._target_table,
            rows_loaded=rows_loaded,
            started_at=started_at,
            finished_at=_now(),
            status=status,
            error_message=error_message,
        )
        log_id = self._load_log_repo.insert(log)
        self._conn.commit()
        return dataclasses.replace(log, id=log_id)
