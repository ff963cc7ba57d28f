from rich.console import Console
from rich.table import Table

from playoff_pool.domain.draft import DraftOrderEntry, DraftPick, DraftPickDetail, DraftSnapshot
from playoff_pool.domain.load_log import LoadLog
from playoff_pool.domain.participant import Participant
from playoff_pool.domain.player import EligibilityStats, Player
from playoff_pool.domain.roster import PLAYOFF_WEEKS, RosterEntryScores, Standing
from playoff_pool.domain.stats import SyncSummary

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_participants(participants: list[Participant]) -> None:
    if not participants:
        console.print("No participants found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Email")
    for p in participants:
        table.add_row(str(p.id), p.name, p.email or "")
    console.print(table)


def print_players(players: list[Player]) -> None:
    if not players:
        console.print("No players found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("ID", justify="right")
    table.add_column("Name")
    table.add_column("Pos")
    table.add_column("Team")
    table.add_column("Proj", justify="right")
    table.add_column("Eligible")
    for p in players:
        proj = f"{p.projected_points:.0f}" if p.projected_points is not None else ""
        eligible = "[green]yes[/green]" if p.is_draft_eligible else "[red]no[/red]"
        table.add_row(str(p.id), p.name, p.position, p.team, proj, eligible)
    console.print(table)


def print_eligibility_stats(stats: EligibilityStats) -> None:
    console.print(
        f"[bold]{stats.total}[/bold] players: "
        f"[green]{stats.eligible} eligible[/green], [red]{stats.ineligible} ineligible[/red]"
    )
    if not stats.teams:
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Team")
    table.add_column("Eligible", justify="right")
    table.add_column("Ineligible", justify="right")
    table.add_column("Total", justify="right")
    for t in stats.teams:
        table.add_row(t.team, str(t.eligible), str(t.ineligible), str(t.total))
    console.print(table)


def print_draft(snapshot: DraftSnapshot, picker: DraftOrderEntry | None) -> None:
    draft = snapshot.draft
    console.print(f"Draft [bold]{draft.id}[/bold] for {draft.season_year} ({draft.total_rounds} rounds)")
    if draft.is_complete:
        console.print("  Status: [bold green]complete[/bold green]")
    else:
        console.print(f"  Round {draft.current_round}, pick {draft.current_pick}")
        if picker is not None:
            console.print(f"  On the clock: [bold]{picker.participant_name}[/bold]")
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Order", justify="right")
    table.add_column("Participant")
    for entry in snapshot.order:
        table.add_row(str(entry.pick_order), entry.participant_name or str(entry.participant_id))
    console.print(table)


def print_draft_picks(picks: list[DraftPickDetail]) -> None:
    if not picks:
        console.print("No picks yet.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Pick", justify="right")
    table.add_column("Rd", justify="right")
    table.add_column("Participant")
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    for d in picks:
        table.add_row(
            str(d.pick.pick_number),
            str(d.pick.round),
            d.participant_name,
            d.player_name,
            d.player_position or "",
            d.player_team or "",
        )
    console.print(table)


def print_pick(pick: DraftPick) -> None:
    console.print(f"[bold green]Pick {pick.pick_number}[/bold green] (round {pick.round}) recorded")


def print_ingest_result(log: LoadLog) -> None:
    console.print(f"[bold green]Ingest complete:[/bold green] {log.rows_loaded} rows loaded into {log.target_table}")
    console.print(f"  Source: {log.source_detail}")
    console.print(f"  Status: {log.status}")


def print_sync_summary(label: str, summary: SyncSummary) -> None:
    week = f" week {summary.week}" if summary.week is not None else ""
    console.print(f"[bold green]{label}{week}:[/bold green] {summary.updated} updated, {summary.skipped} skipped")


def print_standings(year: int, standings: list[Standing]) -> None:
    if not standings:
        console.print(f"No participants for {year}.")
        return
    table = Table(title=f"Standings {year}", show_edge=False, pad_edge=False)
    table.add_column("#", justify="right")
    table.add_column("Participant")
    table.add_column("Points", justify="right")
    for rank, s in enumerate(standings, start=1):
        table.add_row(str(rank), s.participant_name, f"{s.total_points:.2f}")
    console.print(table)


def print_roster(participant: Participant, year: int, entries: list[RosterEntryScores]) -> None:
    console.print(f"Roster for [bold]{participant.name}[/bold] ({year})")
    if not entries:
        console.print("  No players.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Player")
    table.add_column("Pos")
    table.add_column("Team")
    for week in PLAYOFF_WEEKS:
        table.add_column(f"Wk{week}", justify="right")
    table.add_column("Total", justify="right")
    for e in entries:
        weekly = [f"{e.weekly_points[w]:.2f}" if w in e.weekly_points else "-" for w in PLAYOFF_WEEKS]
        table.add_row(e.entry.player_name, e.entry.position or "", e.entry.team or "", *weekly, f"{e.total_points:.2f}")
    console.print(table)
    console.print(f"  Total: [bold]{sum(e.total_points for e in entries):.2f}[/bold]")
