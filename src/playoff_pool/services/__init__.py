"""Application services: each takes its repositories and connection explicitly."""

from playoff_pool.services.actuals_sync import ActualsSyncService
from playoff_pool.services.participants import ParticipantService
from playoff_pool.services.player_catalog import PlayerCatalogService
from playoff_pool.services.player_sync import PlayerSyncService
from playoff_pool.services.projections_sync import ProjectionsSyncService
from playoff_pool.services.roster_scoring import RosterScoringService
from playoff_pool.services.rosters import RosterService
from playoff_pool.services.standings import StandingsService

__all__ = [
    "ActualsSyncService",
    "ParticipantService",
    "PlayerCatalogService",
    "PlayerSyncService",
    "ProjectionsSyncService",
    "RosterScoringService",
    "RosterService",
    "StandingsService",
]
