from dataclasses import dataclass


@dataclass(frozen=True)
class PoolError:
    message: str

    @property
    def kind(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class DraftError(PoolError):
    pass


@dataclass(frozen=True)
class NoParticipants(DraftError):
    message: str = "No participants found. Add participants first."


@dataclass(frozen=True)
class DraftNotFound(DraftError):
    message: str = "Draft not found"


@dataclass(frozen=True)
class DraftComplete(DraftError):
    message: str = "Draft is already complete"


@dataclass(frozen=True)
class NoDraftOrder(DraftError):
    message: str = "Draft order not found"


@dataclass(frozen=True)
class NotYourTurn(DraftError):
    message: str = "It is not your turn to pick"


@dataclass(frozen=True)
class PlayerAlreadyDrafted(DraftError):
    message: str = "Player already drafted"


@dataclass(frozen=True)
class StorageError(DraftError):
    message: str = "Storage failure"


@dataclass(frozen=True)
class PlayerNotFound(PoolError):
    message: str = "Player not found"


@dataclass(frozen=True)
class ParticipantNotFound(PoolError):
    message: str = "Participant not found"


@dataclass(frozen=True)
class ValidationError(PoolError):
    field: str = ""


@dataclass(frozen=True)
class ConflictError(PoolError):
    field: str = ""


@dataclass(frozen=True)
class NotPlayoffWeek(PoolError):
    nfl_week: int = 0


@dataclass(frozen=True)
class IngestError(PoolError):
    source_type: str
    source_detail: str
    target_table: str


@dataclass(frozen=True)
class ConfigError(PoolError):
    unrecognized_keys: tuple[str, ...] = ()
