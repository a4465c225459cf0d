import json

import pytest

from robin import cli


GAME = {
    "home_team_id": "TeamA",
    "away_team_id": "TeamB",
    "rows": [
        {"kind": "header", "text": "First Quarter"},
        {"kind": "score", "home_score": 6, "away_score": 0, "description": "John Smith 5 Yd Run"},
        {"kind": "score", "home_score": 7, "away_score": 0, "description": "(Jane Doe Kick)", "score_type_tag": "XP"},
        {"kind": "header", "text": "Second Quarter"},
        {"kind": "score", "home_score": 7, "away_score": 3, "description": "Jim Kicker 33 Yd Field Goal"},
    ],
}


def _write_game(tmp_path, payload=GAME):
    path = tmp_path / "game.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_main_prints_drives_json(tmp_path, capsys):
    exit_code = cli.main([str(_write_game(tmp_path))])

    captured = capsys.readouterr()
    assert exit_code == 0
    drives = json.loads(captured.out)
    assert [drive["possessing_team_id"] for drive in drives] == ["TeamA", "TeamB"]
    assert [len(drive["plays"]) for drive in drives] == [2, 1]
    assert drives[0]["plays"][1]["scoring_method"] == "XP"
    assert drives[1]["quarter"] == "Q2"
    assert "Reconstructed 2 drives with 3 plays, last score 7-3" in captured.err


def test_main_writes_output_file(tmp_path, capsys):
    output = tmp_path / "drives.json"

    exit_code = cli.main([str(_write_game(tmp_path)), "--output", str(output)])

    assert exit_code == 0
    assert capsys.readouterr().out == ""
    assert len(json.loads(output.read_text(encoding="utf-8"))) == 2


def test_main_team_flags_override_payload(tmp_path, capsys):
    exit_code = cli.main([str(_write_game(tmp_path)), "--home", "KC", "--away", "BUF"])

    drives = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert drives[0]["plays"][0]["author"] == "KC/John Smith"


def test_main_reads_csv_with_column_mapping(tmp_path, capsys):
    path = tmp_path / "rows.csv"
    path.write_text(
        "play,home,away,tag\n"
        "First Quarter,,,\n"
        "Budda Baker 99 Yd Interception Return (Matt Prater Kick),0,7,\n",
        encoding="utf-8",
    )

    exit_code = cli.main(
        [
            str(path),
            "--home",
            "SEA",
            "--away",
            "ARI",
            "--column",
            "text=play",
            "--column",
            "home_score=home",
            "--column",
            "away_score=away",
            "--column",
            "score_type_tag=tag",
        ]
    )

    drives = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert drives[0]["possessing_team_id"] == "ARI"
    assert drives[0]["plays"][0]["play_type"] == "interception-return"
    assert drives[0]["plays"][0]["category"] == "defensive"


def test_main_csv_requires_teams(tmp_path, capsys):
    path = tmp_path / "rows.csv"
    path.write_text("text,home_score,away_score\nFirst Quarter,,\n", encoding="utf-8")

    exit_code = cli.main([str(path)])

    assert exit_code == 1
    assert "--home and --away are required" in capsys.readouterr().err


def test_main_reports_bad_row(tmp_path, capsys):
    payload = dict(GAME, rows=[*GAME["rows"], {"kind": "score", "home_score": 0, "away_score": 3}])

    exit_code = cli.main([str(_write_game(tmp_path, payload))])

    assert exit_code == 1
    assert "error: row 6:" in capsys.readouterr().err


def test_main_unknown_source(tmp_path, capsys):
    exit_code = cli.main([str(_write_game(tmp_path)), "--source", "teletext"])

    err = capsys.readouterr().err
    assert exit_code == 1
    assert "error: No scoring rules configured for source='teletext'" in err


def test_env_log_level(monkeypatch):
    monkeypatch.setenv("ROBIN_LOG_LEVEL", "debug")
    assert cli._env_log_level() == "DEBUG"

    monkeypatch.setenv("ROBIN_LOG_LEVEL", "loud")
    assert cli._env_log_level() == "WARNING"

    monkeypatch.delenv("ROBIN_LOG_LEVEL")
    assert cli._env_log_level() == "WARNING"


def test_main_rejects_invalid_log_level(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(_write_game(tmp_path)), "--log-level", "loud"])

    assert excinfo.value.code == 2
    assert "invalid log level" in capsys.readouterr().err


def test_log_level_argument_normalizes_case():
    assert cli._log_level(" info ") == "INFO"
