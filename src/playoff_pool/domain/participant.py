from dataclasses import dataclass


@dataclass(frozen=True)
class Participant:
    name: str
    email: str | None = None
    external_id: str | None = None
    id: int | None = None
    created_at: str | None = None
