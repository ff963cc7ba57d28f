import logging
import sqlite3

from playoff_pool.domain.errors import ConflictError, PoolError, StorageError, ValidationError
from playoff_pool.domain.participant import Participant
from playoff_pool.domain.result import Err, Ok, Result
from playoff_pool.repos.errors import DuplicateParticipantError
from playoff_pool.repos.protocols import ParticipantRepo

logger = logging.getLogger(__name__)


class ParticipantService:
    def __init__(self, conn: sqlite3.Connection, participant_repo: ParticipantRepo) -> None:
        self._conn = conn
        self._participant_repo = participant_repo

    def create_participant(
        self,
        name: str,
        email: str | None = None,
        external_id: str | None = None,
    ) -> Result[int, PoolError]:
        name = name.strip()
        if not name:
            return Err(ValidationError("Name is required", field="name"))
        participant = Participant(name=name, email=email or None, external_id=external_id or None)
        try:
            participant_id = self._participant_repo.insert(participant)
            self._conn.commit()
        except DuplicateParticipantError as exc:
            self._conn.rollback()
            return Err(ConflictError(str(exc), field=exc.column))
        except sqlite3.Error as exc:
            self._conn.rollback()
            logger.exception("Creating participant %r failed", name)
            return Err(StorageError(f"Failed to create participant: {exc}"))
        logger.info("Created participant %d (%s)", participant_id, name)
        return Ok(participant_id)

    def list_participants(self) -> list[Participant]:
        return self._participant_repo.all_by_name()

    def get_participant(self, participant_id: int) -> Participant | None:
        return self._participant_repo.get_by_id(participant_id)
