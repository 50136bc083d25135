"""File ingestion for projection, league and draft inputs.

Handles the quirks of typical projection exports:
- Header variants ("PLAYER NAME", "POS", "RK", ...)
- Comma-formatted numbers (e.g., "3,904.1")
- Blank placeholder rows
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import pandas as pd

from src.data_pipeline.config import PLAYER_COLUMN_ALIASES, REQUIRED_PLAYER_COLUMNS
from src.valuation.models import LeagueConfig
from src.valuation.player_pool import ConfigurationError

logger = logging.getLogger(__name__)

_DRAFTED_HEADERS = {"PLAYER", "PLAYER NAME", "NAME"}


class IngestionError(Exception):
    """Raised when an input file cannot be read."""


def _parse_numeric(value):
    """Parse a numeric string that may contain commas (e.g., '3,904.1' -> 3904.1)."""
    if pd.isna(value):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).replace(",", "").strip().strip('"')
    if s == "" or s.isspace():
        return float("nan")
    try:
        return float(s)
    except ValueError:
        return float("nan")


def _strip_strings(df: pd.DataFrame) -> pd.DataFrame:
    """Strip surrounding quotes / whitespace from every string value."""
    out = df.copy()
    for col in out.columns:
        out[col] = out[col].map(
            lambda v: v.strip().strip('"').strip() if isinstance(v, str) else v
        )
    return out


def _canonical_header(header) -> str:
    key = str(header).strip().strip('"').upper()
    return PLAYER_COLUMN_ALIASES.get(key, str(header).strip())


class ProjectionIngester:
    """Reads the player, league and drafted-player input files.

    Relative file names are resolved against *data_dir* when one is given.
    """

    def __init__(self, data_dir: Optional[Path] = None):
        self.data_dir = Path(data_dir) if data_dir is not None else None

    def _resolve_path(self, filename) -> Path:
        """Build the full file path, raising if it does not exist."""
        filepath = Path(filename)
        if self.data_dir is not None and not filepath.is_absolute():
            filepath = self.data_dir / filepath
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        return filepath

    # ------------------------------------------------------------------
    # Player projections
    # ------------------------------------------------------------------
    def read_players(self, filename) -> pd.DataFrame:
        """Read a player projection CSV.

        Returns DataFrame with canonical columns (whichever are present):
            Rank, Player, Team, Position, FPTS, Source_Row

        ``Source_Row`` is the 0-based data row in the file, kept so values
        can be written back against the original rows. Unparseable points
        default to 0.

        Raises:
            ConfigurationError: if a required column is missing.
            IngestionError: if the file cannot be read.
        """
        filepath = self._resolve_path(filename)
        logger.info("Reading player projections: %s", filepath.name)

        try:
            df = pd.read_csv(filepath, quotechar='"', dtype=str, skip_blank_lines=False)
        except (OSError, ValueError) as e:
            raise IngestionError(f"Failed to read {filepath}: {e}") from e

        df = df.rename(columns=_canonical_header)
        missing = [c for c in REQUIRED_PLAYER_COLUMNS if c not in df.columns]
        if missing:
            raise ConfigurationError(
                f"{filepath.name} is missing required column(s): {', '.join(missing)}"
            )

        df = _strip_strings(df)
        df["Source_Row"] = range(len(df))

        # Drop placeholder rows with no player name
        df = df[df["Player"].notna() & (df["Player"] != "")]
        df = df.reset_index(drop=True)

        df["FPTS"] = df["FPTS"].apply(_parse_numeric).fillna(0.0)
        if "Rank" in df.columns:
            df["Rank"] = df["Rank"].apply(_parse_numeric)

        logger.info("Loaded %d player projections", len(df))
        return df

    # ------------------------------------------------------------------
    # League settings
    # ------------------------------------------------------------------
    def read_league_config(self, filename) -> LeagueConfig:
        """Read a JSON league settings file.

        Expected shape::

            {"num_teams": 12,
             "positions": {"QB": {"starters": 1, "bench": 1}, ...,
                           "FLEX": {"starters": 1}, "SF": {"starters": 1}}}

        Raises:
            IngestionError: if the file cannot be read or is not valid JSON.
        """
        filepath = self._resolve_path(filename)
        logger.info("Reading league settings: %s", filepath.name)

        try:
            with open(filepath, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise IngestionError(f"Failed to read league settings {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise IngestionError(
                f"League settings in {filepath} must be a JSON object"
            )

        league = LeagueConfig.from_dict(data)
        logger.info(
            "Loaded league settings: %d teams, positions=%s, bonus slots=%s",
            league.num_teams,
            sorted(p.value for p in league.positions),
            sorted(s.value for s in league.bonus_slots),
        )
        return league

    # ------------------------------------------------------------------
    # Drafted players
    # ------------------------------------------------------------------
    def read_drafted_players(self, filename) -> List[str]:
        """Read the list of already-drafted player names.

        Accepts a CSV with a ``Player`` (or ``Name``) column, or a bare
        one-name-per-line file.
        """
        filepath = self._resolve_path(filename)
        logger.info("Reading drafted players: %s", filepath.name)

        try:
            df = pd.read_csv(filepath, header=None, dtype=str, quotechar='"')
        except pd.errors.EmptyDataError:
            return []
        except (OSError, ValueError) as e:
            raise IngestionError(f"Failed to read {filepath}: {e}") from e

        df = _strip_strings(df)
        column = 0
        first_row = [str(v).upper() for v in df.iloc[0]] if len(df) else []
        for i, header in enumerate(first_row):
            if header in _DRAFTED_HEADERS:
                column = i
                df = df.iloc[1:]
                break

        names = [n for n in df.iloc[:, column] if isinstance(n, str) and n]
        logger.info("Loaded %d drafted players", len(names))
        return names
