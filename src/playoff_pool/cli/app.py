from typing import Annotated

import typer

from playoff_pool.auth import authorize_admin
from playoff_pool.cli._logging import configure_logging
from playoff_pool.cli._output import (
    console,
    print_draft,
    print_draft_picks,
    print_eligibility_stats,
    print_error,
    print_ingest_result,
    print_participants,
    print_pick,
    print_players,
    print_roster,
    print_standings,
    print_sync_summary,
)
from playoff_pool.cli.factory import build_pool_container
from playoff_pool.config import PoolSettings, create_config, load_settings
from playoff_pool.db.connection import create_connection
from playoff_pool.db.pool import ConnectionPool
from playoff_pool.domain.result import Err, Ok
from playoff_pool.domain.season import current_season_year
from playoff_pool.web.app import create_app

app = typer.Typer(name="pool", help="Fantasy Playoff Pool: snake draft and scoring CLI")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
) -> None:
    """Fantasy Playoff Pool: snake draft and scoring CLI."""
    configure_logging(verbose=verbose)
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_DataDirOpt = Annotated[str | None, typer.Option("--data-dir", help="Data directory (overrides config)")]
_ConfigOpt = Annotated[str, typer.Option("--config", help="YAML config file")]
_YearOpt = Annotated[int | None, typer.Option("--year", help="Season year (defaults to the current season)")]
_SeasonOpt = Annotated[int, typer.Option("--season", help="NFL season year")]
_WeekOpt = Annotated[int, typer.Option("--week", help="NFL week number")]
_EndWeekOpt = Annotated[int | None, typer.Option("--end-week", help="Last NFL week of a range (inclusive)")]


def _settings(data_dir: str | None, config_path: str) -> PoolSettings:
    match load_settings(create_config(config_path, data_dir=data_dir)):
        case Ok(settings):
            return settings
        case Err(e):
            print_error(e.message)
            raise typer.Exit(code=1)


def _year(year: int | None) -> int:
    return year if year is not None else current_season_year()


# --- participants subcommand group ---

participants_app = typer.Typer(name="participants", help="Manage pool participants")
app.add_typer(participants_app, name="participants")


@participants_app.command("add")
def participants_add(
    name: Annotated[str, typer.Argument(help="Display name")],
    email: Annotated[str | None, typer.Option("--email", help="Unique email address")] = None,
    external_id: Annotated[str | None, typer.Option("--external-id", help="Identity-provider subject")] = None,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Add a participant."""
    with build_pool_container(_settings(data_dir, config)) as c:
        match c.participant_service.create_participant(name, email=email, external_id=external_id):
            case Ok(participant_id):
                console.print(f"[bold green]Added[/bold green] participant {participant_id}: {name}")
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@participants_app.command("list")
def participants_list(data_dir: _DataDirOpt = None, config: _ConfigOpt = "pool.yaml") -> None:
    """List participants by name."""
    with build_pool_container(_settings(data_dir, config)) as c:
        print_participants(c.participant_service.list_participants())


# --- players subcommand group ---

players_app = typer.Typer(name="players", help="Player catalog")
app.add_typer(players_app, name="players")


@players_app.command("sync")
def players_sync(data_dir: _DataDirOpt = None, config: _ConfigOpt = "pool.yaml") -> None:
    """Refresh the player catalog from ESPN team rosters."""
    with build_pool_container(_settings(data_dir, config)) as c:
        match c.player_sync_service().sync():
            case Ok(log):
                print_ingest_result(log)
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@players_app.command("search")
def players_search(
    query: Annotated[str, typer.Argument(help="Name, team or position substring")] = "",
    limit: Annotated[int, typer.Option("--limit", help="Maximum rows")] = 100,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Search the player catalog."""
    with build_pool_container(_settings(data_dir, config)) as c:
        print_players(c.catalog_service.search(query, limit=limit))


# --- eligibility subcommand group ---

eligibility_app = typer.Typer(name="eligibility", help="Draft eligibility of catalog players")
app.add_typer(eligibility_app, name="eligibility")

_EligibleOpt = Annotated[bool, typer.Option("--eligible/--ineligible", help="Eligibility to set")]


@eligibility_app.command("teams")
def eligibility_teams(
    teams: Annotated[list[str], typer.Argument(help="Team abbreviations")],
    eligible: _EligibleOpt = True,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Set eligibility for every player on the given teams."""
    with build_pool_container(_settings(data_dir, config)) as c:
        updated = c.catalog_service.set_team_eligibility(teams, eligible)
    console.print(f"Updated {updated} players")


@eligibility_app.command("all")
def eligibility_all(
    eligible: _EligibleOpt = True,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Set eligibility for every player."""
    with build_pool_container(_settings(data_dir, config)) as c:
        updated = c.catalog_service.set_all_eligibility(eligible)
    console.print(f"Updated {updated} players")


@eligibility_app.command("toggle")
def eligibility_toggle(
    player_id: Annotated[int, typer.Argument(help="Player id")],
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Flip one player's eligibility."""
    with build_pool_container(_settings(data_dir, config)) as c:
        match c.catalog_service.toggle_eligibility(player_id):
            case Ok(eligible):
                console.print(f"Player {player_id} is now {'eligible' if eligible else 'ineligible'}")
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@eligibility_app.command("stats")
def eligibility_stats(data_dir: _DataDirOpt = None, config: _ConfigOpt = "pool.yaml") -> None:
    """Show eligibility totals by team."""
    with build_pool_container(_settings(data_dir, config)) as c:
        print_eligibility_stats(c.catalog_service.eligibility_stats())


# --- draft subcommand group ---

draft_app = typer.Typer(name="draft", help="Run the snake draft")
app.add_typer(draft_app, name="draft")


@draft_app.command("start")
def draft_start(
    year: _YearOpt = None,
    rounds: Annotated[int | None, typer.Option("--rounds", help="Number of rounds")] = None,
    yes: Annotated[bool, typer.Option("--yes", help="Skip confirmation")] = False,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Start a new draft, replacing any existing draft and rosters for the year."""
    settings = _settings(data_dir, config)
    season_year = _year(year)
    total_rounds = rounds if rounds is not None else settings.default_rounds
    with build_pool_container(settings) as c:
        if not yes and c.draft_engine.get_current_draft(season_year) is not None:
            typer.confirm(f"Replace the existing {season_year} draft and its rosters?", abort=True)
        match c.draft_engine.create_draft(season_year, total_rounds):
            case Ok(draft_id):
                console.print(f"[bold green]Started[/bold green] draft {draft_id} for {season_year}")
                snapshot = c.draft_engine.get_current_draft(season_year)
                if snapshot is not None:
                    print_draft(snapshot, c.draft_engine.get_current_picker(draft_id))
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@draft_app.command("delete")
def draft_delete(
    year: _YearOpt = None,
    yes: Annotated[bool, typer.Option("--yes", help="Skip confirmation")] = False,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Delete the year's draft, its picks and rosters."""
    season_year = _year(year)
    if not yes:
        typer.confirm(f"Delete the {season_year} draft and its rosters?", abort=True)
    with build_pool_container(_settings(data_dir, config)) as c:
        match c.draft_engine.delete_draft(season_year):
            case Ok(_):
                console.print(f"[bold green]Deleted[/bold green] draft for {season_year}")
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


@draft_app.command("show")
def draft_show(year: _YearOpt = None, data_dir: _DataDirOpt = None, config: _ConfigOpt = "pool.yaml") -> None:
    """Show the draft order and who is on the clock."""
    season_year = _year(year)
    with build_pool_container(_settings(data_dir, config)) as c:
        snapshot = c.draft_engine.get_current_draft(season_year)
        if snapshot is None:
            print_error(f"no draft for {season_year}")
            raise typer.Exit(code=1)
        assert snapshot.draft.id is not None
        print_draft(snapshot, c.draft_engine.get_current_picker(snapshot.draft.id))


@draft_app.command("picks")
def draft_picks(year: _YearOpt = None, data_dir: _DataDirOpt = None, config: _ConfigOpt = "pool.yaml") -> None:
    """List picks made so far."""
    season_year = _year(year)
    with build_pool_container(_settings(data_dir, config)) as c:
        snapshot = c.draft_engine.get_current_draft(season_year)
        if snapshot is None:
            print_error(f"no draft for {season_year}")
            raise typer.Exit(code=1)
        assert snapshot.draft.id is not None
        print_draft_picks(c.draft_engine.get_draft_picks(snapshot.draft.id))


@draft_app.command("pick")
def draft_pick(
    participant_id: Annotated[int, typer.Argument(help="Participant making the pick")],
    player_id: Annotated[int, typer.Argument(help="Player to draft")],
    year: _YearOpt = None,
    admin_token: Annotated[
        str | None, typer.Option("--admin-token", help="Pick out of turn as admin")
    ] = None,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Make a pick in the current draft."""
    settings = _settings(data_dir, config)
    override = None
    if admin_token is not None:
        override = authorize_admin(admin_token, settings.admin_token, granted_to="cli")
        if override is None:
            print_error("admin token rejected")
            raise typer.Exit(code=1)
    season_year = _year(year)
    with build_pool_container(settings) as c:
        snapshot = c.draft_engine.get_current_draft(season_year)
        if snapshot is None:
            print_error(f"no draft for {season_year}")
            raise typer.Exit(code=1)
        assert snapshot.draft.id is not None
        match c.draft_engine.make_pick(snapshot.draft.id, participant_id, player_id, override=override):
            case Ok(pick):
                print_pick(pick)
            case Err(e):
                print_error(e.message)
                raise typer.Exit(code=1)


# --- actuals subcommand group ---

actuals_app = typer.Typer(name="actuals", help="Weekly box-score actuals")
app.add_typer(actuals_app, name="actuals")


@actuals_app.command("sync")
def actuals_sync(
    season: _SeasonOpt,
    week: _WeekOpt,
    end_week: _EndWeekOpt = None,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Score ESPN box scores for one week, or a range of weeks."""
    failed = False
    with build_pool_container(_settings(data_dir, config)) as c:
        service = c.actuals_sync_service()
        for result in service.sync_weeks(season, week, end_week if end_week is not None else week):
            match result:
                case Ok(summary):
                    print_sync_summary("Actuals", summary)
                case Err(e):
                    print_error(e.message)
                    failed = True
    if failed:
        raise typer.Exit(code=1)


# --- projections subcommand group ---

projections_app = typer.Typer(name="projections", help="Sleeper projections")
app.add_typer(projections_app, name="projections")


@projections_app.command("sync")
def projections_sync(
    season: _SeasonOpt,
    week: _WeekOpt,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Store half-PPR projections for catalog players."""
    with build_pool_container(_settings(data_dir, config)) as c:
        print_sync_summary("Projections", c.projections_sync_service().sync(season, week))


# --- scores subcommand group ---

scores_app = typer.Typer(name="scores", help="Roster scoring")
app.add_typer(scores_app, name="scores")


@scores_app.command("calculate")
def scores_calculate(
    season: _SeasonOpt,
    week: _WeekOpt,
    end_week: _EndWeekOpt = None,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Copy weekly actuals onto rosters for NFL playoff weeks 19-22."""
    failed = False
    with build_pool_container(_settings(data_dir, config)) as c:
        results = c.roster_scoring_service.calculate_weeks(season, week, end_week if end_week is not None else week)
    for result in results.values():
        match result:
            case Ok(summary):
                print_sync_summary("Playoff", summary)
            case Err(e):
                print_error(e.message)
                failed = True
    if failed:
        raise typer.Exit(code=1)


@app.command()
def standings(year: _YearOpt = None, data_dir: _DataDirOpt = None, config: _ConfigOpt = "pool.yaml") -> None:
    """Show pool standings."""
    season_year = _year(year)
    with build_pool_container(_settings(data_dir, config)) as c:
        print_standings(season_year, c.standings_service.standings(season_year))


@app.command()
def roster(
    participant_id: Annotated[int, typer.Argument(help="Participant id")],
    year: _YearOpt = None,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Show a participant's roster with weekly points."""
    season_year = _year(year)
    with build_pool_container(_settings(data_dir, config)) as c:
        participant = c.participant_service.get_participant(participant_id)
        if participant is None:
            print_error(f"participant {participant_id} not found")
            raise typer.Exit(code=1)
        print_roster(participant, season_year, c.roster_service.roster_with_scores(participant_id, season_year))


@app.command()
def serve(
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Port")] = None,
    data_dir: _DataDirOpt = None,
    config: _ConfigOpt = "pool.yaml",
) -> None:
    """Serve the JSON API."""
    settings = _settings(data_dir, config)
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    # Apply migrations once before worker threads open their own connections.
    create_connection(settings.db_path).close()
    pool = ConnectionPool(settings.db_path, size=settings.server_pool_size)
    bind_host = host or settings.server_host
    bind_port = port or settings.server_port
    if not settings.admin_token:
        console.print("[yellow]No admin token configured; admin routes are disabled.[/yellow]")
    console.print(f"Serving pool API on http://{bind_host}:{bind_port}")
    try:
        create_app(pool, settings).run(host=bind_host, port=bind_port, threaded=True)
    finally:
        pool.close_all()
