import sqlite3
from collections.abc import Iterator
from pathlib import Path

import pytest
from typer.testing import CliRunner

from playoff_pool.cli.app import app
from playoff_pool.db.connection import create_connection
from playoff_pool.repos.draft_repo import SqliteDraftRepo
from tests.helpers import seed_participant, seed_player

runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "pool.yaml"
    path.write_text("admin:\n  token: hunter2\n")
    return path


@pytest.fixture
def db(data_dir: Path) -> Iterator[sqlite3.Connection]:
    connection = create_connection(data_dir / "pool.db")
    yield connection
    connection.close()


def _invoke(args: list[str], data_dir: Path, config_file: Path, **kwargs: object):  # type: ignore[no-untyped-def]
    return runner.invoke(app, [*args, "--data-dir", str(data_dir), "--config", str(config_file)], **kwargs)  # type: ignore[arg-type]


class TestParticipantsCommands:
    def test_add_and_list(self, data_dir: Path, config_file: Path) -> None:
        result = _invoke(["participants", "add", "Alice", "--email", "a@example.com"], data_dir, config_file)
        assert result.exit_code == 0, result.output
        assert "Added participant 1: Alice" in result.output

        result = _invoke(["participants", "list"], data_dir, config_file)
        assert result.exit_code == 0
        assert "Alice" in result.output
        assert "a@example.com" in result.output

    def test_add_blank_name_fails(self, data_dir: Path, config_file: Path) -> None:
        result = _invoke(["participants", "add", " "], data_dir, config_file)
        assert result.exit_code == 1
        assert "Name is required" in result.output

    def test_list_empty(self, data_dir: Path, config_file: Path) -> None:
        result = _invoke(["participants", "list"], data_dir, config_file)
        assert "No participants found." in result.output


class TestDraftCommands:
    def test_full_single_participant_draft(self, data_dir: Path, config_file: Path, db: sqlite3.Connection) -> None:
        alice = seed_participant(db)
        player_id = seed_player(db)

        result = _invoke(["draft", "start", "--year", "2024", "--rounds", "1", "--yes"], data_dir, config_file)
        assert result.exit_code == 0, result.output
        assert "Started draft" in result.output
        assert "On the clock: Alice" in result.output

        result = _invoke(["draft", "pick", str(alice), str(player_id), "--year", "2024"], data_dir, config_file)
        assert result.exit_code == 0, result.output
        assert "Pick 1" in result.output

        result = _invoke(["draft", "show", "--year", "2024"], data_dir, config_file)
        assert "complete" in result.output

        result = _invoke(["draft", "picks", "--year", "2024"], data_dir, config_file)
        assert "Josh Allen" in result.output

    def test_start_without_participants_fails(self, data_dir: Path, config_file: Path) -> None:
        result = _invoke(["draft", "start", "--year", "2024", "--yes"], data_dir, config_file)
        assert result.exit_code == 1
        assert "No participants found" in result.output

    def test_restart_asks_for_confirmation(self, data_dir: Path, config_file: Path, db: sqlite3.Connection) -> None:
        seed_participant(db)
        _invoke(["draft", "start", "--year", "2024", "--yes"], data_dir, config_file)

        result = _invoke(["draft", "start", "--year", "2024"], data_dir, config_file, input="n\n")

        assert result.exit_code == 1
        assert len(SqliteDraftRepo(db).get_ids_by_season_year(2024)) == 1

    def test_show_missing_draft(self, data_dir: Path, config_file: Path) -> None:
        result = _invoke(["draft", "show", "--year", "2024"], data_dir, config_file)
        assert result.exit_code == 1
        assert "no draft for 2024" in result.output

    def test_pick_with_wrong_admin_token(self, data_dir: Path, config_file: Path, db: sqlite3.Connection) -> None:
        alice = seed_participant(db)
        player_id = seed_player(db)
        _invoke(["draft", "start", "--year", "2024", "--yes"], data_dir, config_file)

        result = _invoke(
            ["draft", "pick", str(alice), str(player_id), "--year", "2024", "--admin-token", "guess"],
            data_dir,
            config_file,
        )

        assert result.exit_code == 1
        assert "admin token rejected" in result.output

    def test_admin_pick_out_of_turn(self, data_dir: Path, config_file: Path, db: sqlite3.Connection) -> None:
        ids = [seed_participant(db, name) for name in ("Alice", "Bob")]
        player_id = seed_player(db)
        _invoke(["draft", "start", "--year", "2024", "--yes"], data_dir, config_file)
        draft_id = SqliteDraftRepo(db).get_ids_by_season_year(2024)[0]
        waiting = SqliteDraftRepo(db).get_order(draft_id)[1].participant_id
        assert waiting in ids

        plain = _invoke(["draft", "pick", str(waiting), str(player_id), "--year", "2024"], data_dir, config_file)
        assert plain.exit_code == 1
        assert "not your turn" in plain.output

        forced = _invoke(
            ["draft", "pick", str(waiting), str(player_id), "--year", "2024", "--admin-token", "hunter2"],
            data_dir,
            config_file,
        )
        assert forced.exit_code == 0, forced.output

    def test_token_in_environment_does_not_override(
        self, data_dir: Path, config_file: Path, db: sqlite3.Connection
    ) -> None:
        for name in ("Alice", "Bob"):
            seed_participant(db, name)
        player_id = seed_player(db)
        _invoke(["draft", "start", "--year", "2024", "--yes"], data_dir, config_file)
        draft_id = SqliteDraftRepo(db).get_ids_by_season_year(2024)[0]
        waiting = SqliteDraftRepo(db).get_order(draft_id)[1].participant_id

        result = _invoke(
            ["draft", "pick", str(waiting), str(player_id), "--year", "2024"],
            data_dir,
            config_file,
            env={"POOL_ADMIN_TOKEN": "hunter2", "POOL__ADMIN__TOKEN": "hunter2"},
        )

        assert result.exit_code == 1
        assert "not your turn" in result.output
        assert SqliteDraftRepo(db).get_picks(draft_id) == []

    def test_delete(self, data_dir: Path, config_file: Path, db: sqlite3.Connection) -> None:
        seed_participant(db)
        _invoke(["draft", "start", "--year", "2024", "--yes"], data_dir, config_file)

        result = _invoke(["draft", "delete", "--year", "2024", "--yes"], data_dir, config_file)
        assert result.exit_code == 0
        result = _invoke(["draft", "delete", "--year", "2024", "--yes"], data_dir, config_file)
        assert result.exit_code == 1


class TestEligibilityCommands:
    def test_teams_and_stats(self, data_dir: Path, config_file: Path, db: sqlite3.Connection) -> None:
        seed_player(db, "Josh Allen", team="BUF")
        seed_player(db, "Patrick Mahomes", team="KC")

        result = _invoke(["eligibility", "teams", "buf", "--ineligible"], data_dir, config_file)
        assert "Updated 1 players" in result.output

        result = _invoke(["eligibility", "stats"], data_dir, config_file)
        assert "1 eligible" in result.output
        assert "1 ineligible" in result.output

    def test_toggle_missing(self, data_dir: Path, config_file: Path) -> None:
        result = _invoke(["eligibility", "toggle", "42"], data_dir, config_file)
        assert result.exit_code == 1
        assert "Player not found" in result.output


class TestScoringCommands:
    def test_non_playoff_week_fails(self, data_dir: Path, config_file: Path) -> None:
        result = _invoke(["scores", "calculate", "--season", "2024", "--week", "17"], data_dir, config_file)
        assert result.exit_code == 1
        assert "not a playoff week" in result.output

    def test_playoff_weeks(self, data_dir: Path, config_file: Path) -> None:
        result = _invoke(
            ["scores", "calculate", "--season", "2024", "--week", "19", "--end-week", "20"], data_dir, config_file
        )
        assert result.exit_code == 0, result.output
        assert "Playoff week 1: 0 updated, 0 skipped" in result.output
        assert "Playoff week 2" in result.output

    def test_standings_and_roster(self, data_dir: Path, config_file: Path, db: sqlite3.Connection) -> None:
        alice = seed_participant(db)

        result = _invoke(["standings", "--year", "2024"], data_dir, config_file)
        assert "Alice" in result.output

        result = _invoke(["roster", str(alice), "--year", "2024"], data_dir, config_file)
        assert result.exit_code == 0
        assert "No players." in result.output

        result = _invoke(["roster", "99", "--year", "2024"], data_dir, config_file)
        assert result.exit_code == 1


class TestConfig:
    def test_unrecognized_section_fails(self, data_dir: Path, tmp_path: Path) -> None:
        bad = tmp_path / "bad.yaml"
        bad.write_text("admn:\n  token: x\n")
        result = _invoke(["participants", "list"], data_dir, bad)
        assert result.exit_code == 1
        assert "Unrecognized configuration sections: admn" in result.output
