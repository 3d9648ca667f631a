import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from portal.cli import app

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    config_data = {
        "db_path": str(tmp_path / "cli.db"),
        "seed_demo": True,
        "icebreaker": {
            "provider_id": "fake",
            "provider_type": "fake",
            "model_name": "fake-model",
        },
    }
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.dump(config_data, f)
    return path


def test_login_seeds_and_shows_matches(config_file: Path) -> None:
    result = runner.invoke(app, ["login", "101", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "Logged in as 101" in result.output
    assert "102" in result.output


def test_login_new_participant(config_file: Path) -> None:
    result = runner.invoke(app, ["login", "777", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "not picked anyone" in result.output


def test_login_blank_identifier_fails(config_file: Path) -> None:
    result = runner.invoke(app, ["login", "  ", "--config", str(config_file)])

    assert result.exit_code == 1


def test_submit_and_match(config_file: Path) -> None:
    runner.invoke(app, ["login", "777", "--config", str(config_file)])

    result = runner.invoke(app, ["submit", "777", "103", "104", "105", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "Choices saved" in result.output
    assert "No mutual matches" in result.output


def test_submit_rejects_self_pick(config_file: Path) -> None:
    result = runner.invoke(app, ["submit", "777", "777", "104", "105", "--config", str(config_file)])

    assert result.exit_code == 1


def test_submit_rejects_wrong_count(config_file: Path) -> None:
    result = runner.invoke(app, ["submit", "777", "104", "--config", str(config_file)])

    assert result.exit_code == 1


def test_matches_with_icebreakers(config_file: Path) -> None:
    runner.invoke(app, ["seed", "--config", str(config_file)])

    result = runner.invoke(app, ["matches", "102", "--icebreakers", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "101" in result.output
    assert "💬" in result.output


def test_show_unknown_participant_fails(config_file: Path) -> None:
    result = runner.invoke(app, ["show", "999", "--config", str(config_file)])

    assert result.exit_code == 1


def test_show_known_participant(config_file: Path) -> None:
    runner.invoke(app, ["seed", "--config", str(config_file)])

    result = runner.invoke(app, ["show", "101", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "102, 103, 104" in result.output
    assert "1 participant(s)" in result.output


def test_seed_twice_reports_noop(config_file: Path) -> None:
    first = runner.invoke(app, ["seed", "--config", str(config_file)])
    second = runner.invoke(app, ["seed", "--config", str(config_file)])

    assert "Demo participants added" in first.output
    assert "nothing seeded" in second.output


def test_list_shows_pairs(config_file: Path) -> None:
    runner.invoke(app, ["seed", "--config", str(config_file)])

    result = runner.invoke(app, ["list", "--config", str(config_file)])

    assert result.exit_code == 0
    assert "101 <-> 102" in result.output


def test_reset_then_export(config_file: Path, tmp_path: Path) -> None:
    runner.invoke(app, ["seed", "--config", str(config_file)])

    reset = runner.invoke(app, ["reset", "--yes", "--config", str(config_file)])
    output = tmp_path / "out" / "store.json"
    exported = runner.invoke(app, ["export", "--output", str(output), "--config", str(config_file)])

    assert reset.exit_code == 0
    assert exported.exit_code == 0
    assert json.loads(output.read_text()) == {"users": {}}


def test_export_to_stdout(config_file: Path) -> None:
    runner.invoke(app, ["seed", "--config", str(config_file)])

    result = runner.invoke(app, ["export", "--config", str(config_file)])

    payload = json.loads(result.output)
    assert payload["users"]["102"] == {"rollNumber": "102", "choices": ["101", "105", "106"]}


def test_missing_config_fails(tmp_path: Path) -> None:
    result = runner.invoke(app, ["list", "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
