"""Run the complete valuation pipeline.

Usage:
    python -m src.data_pipeline.run_valuation players.csv league.json
        [--drafted drafted.csv] [--target-pick N] [--output-dir DIR]

Examples:
    python -m src.data_pipeline.run_valuation data/raw/players.csv data/raw/league.json
    python -m src.data_pipeline.run_valuation players.csv league.json \\
        --drafted drafted.csv --target-pick 30
"""

import argparse
import json
import logging
import math
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd

from src.data_pipeline.cleaning import DataCleaner
from src.data_pipeline.config import LATEST_OUTPUT_FILE, OUTPUT_FILE_PATTERN, PROCESSED_DATA_DIR
from src.data_pipeline.ingestion import ProjectionIngester
from src.logging_config import setup_logging
from src.valuation.player_pool import PlayerPool
from src.valuation.valuation_service import ValuationService
from src.vona.models import DraftState
from src.vona.vona_projector import VONAProjector

logger = logging.getLogger(__name__)


def _safe(val, default=None):
    """Return *default* when *val* is NaN/None/pd.NA, else the value."""
    if val is None or val is pd.NA:
        return default
    if isinstance(val, float) and math.isnan(val):
        return default
    return val


def _safe_int(val):
    """Convert *val* to int, returning None for non-numeric values (e.g. '-')."""
    val = _safe(val)
    if val is None:
        return None
    try:
        return int(float(val))
    except (ValueError, TypeError):
        return None


def _frame_to_records(df: pd.DataFrame) -> List[Dict]:
    """Convert a report DataFrame to JSON-safe dicts (NaN -> None)."""
    return [
        {key: _safe(value) for key, value in row.items()}
        for row in df.to_dict(orient="records")
    ]


def _player_to_dict(row: pd.Series) -> dict:
    """Convert a single valued player row to the output JSON structure."""
    return {
        "source_row": _safe_int(row.get("Source_Row")),
        "rank": _safe_int(row.get("Rank")),
        "name": row["Player"],
        "team": _safe(row.get("Team")),
        "position": _safe(row.get("Position")),
        "fpts": float(_safe(row.get("FPTS"), 0)),
        "vor": _safe(row.get("VOR")),
        "vols": _safe(row.get("VOLS")),
    }


def run_valuation(
    players_file: Path,
    league_file: Path,
    drafted_file: Optional[Path] = None,
    target_pick: Optional[int] = None,
    output_dir: Optional[Path] = None,
) -> Path:
    """Run ingest -> clean -> valuation (-> VONA) and write a JSON report.

    Args:
        players_file: Player projection CSV.
        league_file: League settings JSON.
        drafted_file: Optional list of drafted players (enables the live
            draft view for VONA).
        target_pick: Overall pick to project VONA to. VONA is skipped when
            not given.
        output_dir: Directory for JSON output. Defaults to ``data/processed/``.

    Returns:
        Path to the generated JSON file.
    """
    if output_dir is None:
        output_dir = PROCESSED_DATA_DIR

    logger.info("Starting valuation run (players: %s, league: %s)", players_file, league_file)

    # 1. Ingest
    logger.info("Step 1/4: Reading input files...")
    ingester = ProjectionIngester()
    raw_players = ingester.read_players(players_file)
    league = ingester.read_league_config(league_file)
    drafted = ingester.read_drafted_players(drafted_file) if drafted_file else []

    # 2. Clean
    logger.info("Step 2/4: Cleaning player data...")
    cleaner = DataCleaner()
    players_df = cleaner.clean_players(raw_players)
    drafted = cleaner.normalize_drafted_names(drafted)

    # 3. VOR / VOLS
    logger.info("Step 3/4: Calculating VOR and VOLS...")
    service = ValuationService()
    pool = PlayerPool.from_frame(players_df)
    result = service.evaluate(pool, league)
    valued_df = service.annotate_frame(players_df, league, result=result)

    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "players_file": str(players_file),
            "league_size": league.num_teams,
            "total_players": len(pool),
            "drafted_players": len(drafted),
        },
        "players": [_player_to_dict(row) for _, row in valued_df.iterrows()],
        "allocation": _frame_to_records(service.allocation_report(result)),
    }

    # 4. VONA
    if target_pick is not None:
        logger.info("Step 4/4: Projecting VONA to pick %d...", target_pick)
        projector = VONAProjector()
        vona = projector.project(pool, DraftState.from_names(drafted), target_pick, league)
        output_data["vona"] = {
            "target_pick": vona.target_pick,
            "picks_until_target": vona.picks_until_target,
            "draft_round": vona.draft_round,
            "board": _frame_to_records(projector.board_frame(vona)),
            "positions": _frame_to_records(projector.outlook_report(vona)),
            "insights": vona.insights,
        }
        for insight in vona.insights:
            logger.info("  %s", insight)
    else:
        logger.info("Step 4/4: No target pick given, skipping VONA")

    output_dir.mkdir(parents=True, exist_ok=True)
    output_file = output_dir / OUTPUT_FILE_PATTERN.format(name=Path(players_file).stem)

    with open(output_file, "w") as f:
        json.dump(output_data, f, indent=2)

    # Update latest symlink
    latest_link = output_dir / LATEST_OUTPUT_FILE
    if latest_link.exists() or latest_link.is_symlink():
        latest_link.unlink()
    latest_link.symlink_to(output_file.name)

    logger.info("Valuation complete! Output: %s", output_file)
    return output_file


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compute VOR, VOLS and VONA for a fantasy football player pool."
    )
    parser.add_argument("players_file", type=Path, help="player projection CSV")
    parser.add_argument("league_file", type=Path, help="league settings JSON")
    parser.add_argument("--drafted", type=Path, default=None, help="drafted players CSV")
    parser.add_argument("--target-pick", type=int, default=None, help="pick to project VONA to")
    parser.add_argument("--output-dir", type=Path, default=None, help="output directory")
    parser.add_argument("--log-level", default="INFO")
    return parser


if __name__ == "__main__":
    args = _build_parser().parse_args()
    setup_logging(args.log_level)

    try:
        output = run_valuation(
            args.players_file,
            args.league_file,
            drafted_file=args.drafted,
            target_pick=args.target_pick,
            output_dir=args.output_dir,
        )
        print(f"Valuation complete: {output}")
    except Exception:
        logger.exception("Valuation failed")
        sys.exit(1)
