import json
from pathlib import Path

import pytest

from robin.errors import ConfigurationError, MalformedInputError
from robin.ingest import HeaderRow, ScoreRow, load_game_json, load_rows_csv, parse_game, parse_row


def _write_csv(path: Path, header: str, *lines: str) -> Path:
    path.write_text("\n".join((header, *lines)) + "\n", encoding="utf-8")
    return path


def test_parse_row_normalizes_score_row():
    row = parse_row(
        {"kind": "score", "home_score": "7", "away_score": " ", "description": "x", "score_type_tag": " xp "}
    )

    assert isinstance(row, ScoreRow)
    assert row.home_score == 7
    assert row.away_score is None
    assert row.score_type_tag == "XP"


def test_parse_row_blank_tag_is_none():
    row = parse_row({"kind": "score", "home_score": 3, "away_score": 0, "score_type_tag": ""})

    assert row.score_type_tag is None


@pytest.mark.parametrize(
    "raw",
    [
        {"kind": "drive"},
        {"kind": "score", "home_score": -3, "away_score": 0},
        {"kind": "score", "home_score": "three", "away_score": 0},
        "First Quarter",
    ],
)
def test_parse_row_rejects_bad_rows(raw):
    with pytest.raises(MalformedInputError) as excinfo:
        parse_row(raw, row_number=4)

    assert excinfo.value.row_number == 4


def test_parse_game_numbers_rows():
    payload = {
        "home_team_id": " KC ",
        "away_team_id": "BUF",
        "rows": [
            {"kind": "header", "text": "First Quarter"},
            {"kind": "score", "home_score": 7, "away_score": 0, "description": "Isiah Pacheco 4 Yd Run"},
            {"kind": "score", "home_score": 7},
            {"kind": "score", "home_score": "x"},
        ],
    }

    with pytest.raises(MalformedInputError) as excinfo:
        parse_game(payload)

    assert excinfo.value.row_number == 4

    payload["rows"] = payload["rows"][:3]
    game = parse_game(payload)

    assert game.home_team_id == "KC"
    assert isinstance(game.rows[0], HeaderRow)
    assert game.rows[2].away_score is None


@pytest.mark.parametrize("missing", ["home_team_id", "away_team_id"])
def test_parse_game_requires_team_ids(missing):
    payload = {"home_team_id": "KC", "away_team_id": "BUF", "rows": []}
    payload[missing] = "  "

    with pytest.raises(ConfigurationError, match=missing):
        parse_game(payload)


def test_parse_game_rejects_non_list_rows():
    with pytest.raises(MalformedInputError):
        parse_game({"home_team_id": "KC", "away_team_id": "BUF", "rows": "oops"})
    with pytest.raises(MalformedInputError):
        parse_game(["KC", "BUF"])


def test_load_game_json(tmp_path):
    path = tmp_path / "game.json"
    path.write_text(
        json.dumps(
            {
                "home_team_id": "SEA",
                "away_team_id": "ARI",
                "rows": [{"kind": "score", "home_score": 0, "away_score": 3, "description": "Matt Prater 40 Yd Field Goal"}],
            }
        ),
        encoding="utf-8",
    )

    game = load_game_json(path)

    assert game.away_team_id == "ARI"
    assert game.rows[0].description == "Matt Prater 40 Yd Field Goal"


def test_load_game_json_invalid(tmp_path):
    path = tmp_path / "game.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(MalformedInputError):
        load_game_json(path)


def test_load_rows_csv_infers_kind(tmp_path):
    path = _write_csv(
        tmp_path / "rows.csv",
        "text,home_score,away_score,score_type_tag",
        "First Quarter,,,",
        "Isiah Pacheco 4 Yd Run,6,0,",
        "(Harrison Butker Kick),7,0,xp",
    )

    rows = load_rows_csv(path)

    assert isinstance(rows[0], HeaderRow)
    assert rows[0].text == "First Quarter"
    assert rows[1].description == "Isiah Pacheco 4 Yd Run"
    assert (rows[1].home_score, rows[1].away_score) == (6, 0)
    assert rows[2].score_type_tag == "XP"


def test_load_rows_csv_with_mapping(tmp_path):
    path = _write_csv(
        tmp_path / "rows.csv",
        "type,play,home,away,tag",
        "header,,,,",
        "score,Budda Baker Defensive PAT Conversion,0,2,D2P",
    )

    rows = load_rows_csv(
        path,
        mapping={"kind": "type", "description": "play", "home_score": "home", "away_score": "away", "score_type_tag": "tag"},
    )

    assert isinstance(rows[0], HeaderRow)
    assert rows[0].text == ""
    assert rows[1].description == "Budda Baker Defensive PAT Conversion"
    assert rows[1].away_score == 2
    assert rows[1].score_type_tag == "D2P"


def test_load_rows_csv_reports_bad_row(tmp_path):
    path = _write_csv(
        tmp_path / "rows.csv",
        "kind,description,home_score,away_score",
        "score,John Smith 5 Yd Run,6,0",
        "score,Jane Doe 20 Yd Field Goal,six,0",
    )

    with pytest.raises(MalformedInputError) as excinfo:
        load_rows_csv(path)

    assert excinfo.value.row_number == 2
