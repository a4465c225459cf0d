"""Command-line interface for reconstructing scoring drives from scraped rows."""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional, Sequence

from robin.config import DEFAULT_SOURCE, get_rules
from robin.errors import ConfigurationError, ReconstructionError
from robin.ingest import load_game_json, load_rows_csv
from robin.reconstruct import reconstruct_drives


logger = logging.getLogger(__name__)

_SOURCE_ENV = "ROBIN_SOURCE"
_LOG_LEVEL_ENV = "ROBIN_LOG_LEVEL"
_LOG_LEVEL_DEFAULT = "WARNING"


def _log_level(value: str) -> str:
    level = value.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise argparse.ArgumentTypeError(f"invalid log level: {value!r}")
    return level


def _env_log_level() -> str:
    raw = os.getenv(_LOG_LEVEL_ENV)
    if raw is None:
        return _LOG_LEVEL_DEFAULT
    try:
        return _log_level(raw)
    except argparse.ArgumentTypeError:
        logger.warning("Invalid log level for %s: %s; using default %s", _LOG_LEVEL_ENV, raw, _LOG_LEVEL_DEFAULT)
        return _LOG_LEVEL_DEFAULT


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconstruct scoring drives from a scraped scoring summary")
    parser.add_argument("game", type=Path, help="Path to a game JSON payload or a rows CSV")
    parser.add_argument("--home", default=None, help="Home team id (required for CSV input)")
    parser.add_argument("--away", default=None, help="Away team id (required for CSV input)")
    parser.add_argument(
        "--source",
        default=os.getenv(_SOURCE_ENV, DEFAULT_SOURCE),
        help="Scoreboard source whose scoring conventions apply (default: %(default)s)",
    )
    parser.add_argument(
        "--column",
        action="append",
        default=[],
        help="Mapping for rows CSV columns (e.g., description=play)",
    )
    parser.add_argument("--output", type=Path, default=None, help="Write drives JSON here instead of stdout")
    parser.add_argument(
        "--log-level",
        type=_log_level,
        default=_env_log_level(),
        help="Logging level (default: %(default)s)",
    )
    return parser.parse_args(argv)


def _parse_mapping(entries: list[str]) -> dict[str, str]:
    mapping: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise ValueError(f"Invalid mapping entry '{entry}', expected key=value")
        key, value = entry.split("=", 1)
        mapping[key.strip()] = value.strip()
    return mapping


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    try:
        rules = get_rules(args.source)
        if args.game.suffix.lower() == ".csv":
            if not args.home or not args.away:
                raise ConfigurationError("--home and --away are required for CSV input")
            home_team_id, away_team_id = args.home, args.away
            rows = load_rows_csv(args.game, mapping=_parse_mapping(args.column) or None)
        else:
            game = load_game_json(args.game)
            home_team_id = args.home or game.home_team_id
            away_team_id = args.away or game.away_team_id
            rows = game.rows
        drives = reconstruct_drives(home_team_id, away_team_id, rows, rules=rules)
    except (ReconstructionError, KeyError, ValueError, OSError) as exc:
        message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
        print(f"error: {message}", file=sys.stderr)
        return 1

    payload = json.dumps([drive.model_dump(mode="json") for drive in drives], indent=2)
    if args.output:
        args.output.write_text(payload + "\n", encoding="utf-8")
        print(f"Wrote {len(drives)} drives to {args.output}", file=sys.stderr)
    else:
        print(payload)

    plays = sum(len(drive.plays) for drive in drives)
    final = drives[-1] if drives else None
    score = f"{final.home_score}-{final.away_score}" if final else "0-0"
    print(f"Reconstructed {len(drives)} drives with {plays} plays, last score {score}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
