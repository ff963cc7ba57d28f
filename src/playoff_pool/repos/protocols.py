from collections.abc import Sequence
from typing import Protocol

from playoff_pool.domain.draft import Draft, DraftOrderEntry, DraftPick, DraftPickDetail, DraftState
from playoff_pool.domain.load_log import LoadLog
from playoff_pool.domain.participant import Participant
from playoff_pool.domain.player import Player
from playoff_pool.domain.roster import RosterEntry, Standing, WeeklyScore
from playoff_pool.domain.stats import WeeklyActual


class ParticipantRepo(Protocol):
    def insert(self, participant: Participant) -> int: ...

    def get_by_id(self, participant_id: int) -> Participant | None: ...

    def all_by_creation(self) -> list[Participant]: ...

    def all_by_name(self) -> list[Participant]: ...


class PlayerRepo(Protocol):
    def upsert(self, player: Player) -> int: ...

    def get_by_id(self, player_id: int) -> Player | None: ...

    def get_by_espn_id(self, espn_id: str) -> Player | None: ...

    def search(self, query: str, *, limit: int = 100) -> list[Player]: ...

    def all(self) -> list[Player]: ...

    def set_eligibility(self, player_id: int, eligible: bool) -> None: ...

    def set_eligibility_for_teams(self, teams: list[str], eligible: bool) -> int: ...

    def set_eligibility_all(self, eligible: bool) -> int: ...

    def update_projection(self, player_id: int, projected_points: float) -> None: ...


class SeasonRepo(Protocol):
    def get_or_create(self, participant_id: int, year: int) -> int: ...


class RosterRepo(Protocol):
    def insert(self, entry: RosterEntry) -> int: ...

    def get_by_id(self, entry_id: int) -> RosterEntry | None: ...

    def delete(self, entry_id: int) -> bool: ...

    def delete_for_season_year(self, year: int) -> int: ...

    def get_by_participant_year(self, participant_id: int, year: int) -> list[RosterEntry]: ...

    def get_active_by_year(self, year: int) -> list[RosterEntry]: ...


class WeeklyScoreRepo(Protocol):
    def upsert(self, score: WeeklyScore) -> int: ...

    def get_by_roster_entry(self, roster_entry_id: int) -> list[WeeklyScore]: ...

    def standings(self, year: int) -> list[Standing]: ...


class WeeklyActualRepo(Protocol):
    def upsert(self, actual: WeeklyActual) -> int: ...

    def get(self, player_id: int, season: int, week: int) -> WeeklyActual | None: ...


class DraftRepo(Protocol):
    def insert(self, draft: Draft) -> int: ...

    def get_by_id(self, draft_id: int) -> Draft | None: ...

    def get_latest_by_season_year(self, season_year: int) -> Draft | None: ...

    def get_ids_by_season_year(self, season_year: int) -> list[int]: ...

    def delete(self, draft_id: int) -> None: ...

    def update_state(self, draft_id: int, state: DraftState) -> None: ...

    def insert_order(self, draft_id: int, participant_ids: Sequence[int]) -> None: ...

    def get_order(self, draft_id: int) -> list[DraftOrderEntry]: ...

    def insert_pick(self, pick: DraftPick) -> int: ...

    def is_player_picked(self, draft_id: int, player_id: int) -> bool: ...

    def get_picks(self, draft_id: int) -> list[DraftPickDetail]: ...


class LoadLogRepo(Protocol):
    def insert(self, log: LoadLog) -> int: ...

    def get_recent(self, limit: int = 20) -> list[LoadLog]: ...
