"""Data cleaning for player projection rows.

Standardizes the columns the valuation engine reads:
- Extract base position from rank format (WR1 -> WR, D/ST -> DST)
- Standardize team names (full names -> abbreviations)
- Normalize player names for drafted-player matching
"""

import logging
import re
from typing import Iterable, List, Optional

import pandas as pd

from src.data_pipeline.config import PLAYER_COLUMNS

logger = logging.getLogger(__name__)

# Full team name -> standard abbreviation
TEAM_NAME_TO_ABBR = {
    "Arizona Cardinals": "ARI",
    "Atlanta Falcons": "ATL",
    "Baltimore Ravens": "BAL",
    "Buffalo Bills": "BUF",
    "Carolina Panthers": "CAR",
    "Chicago Bears": "CHI",
    "Cincinnati Bengals": "CIN",
    "Cleveland Browns": "CLE",
    "Dallas Cowboys": "DAL",
    "Denver Broncos": "DEN",
    "Detroit Lions": "DET",
    "Green Bay Packers": "GB",
    "Houston Texans": "HOU",
    "Indianapolis Colts": "IND",
    "Jacksonville Jaguars": "JAC",
    "Kansas City Chiefs": "KC",
    "Las Vegas Raiders": "LV",
    "Los Angeles Chargers": "LAC",
    "Los Angeles Rams": "LAR",
    "Miami Dolphins": "MIA",
    "Minnesota Vikings": "MIN",
    "New England Patriots": "NE",
    "New Orleans Saints": "NO",
    "New York Giants": "NYG",
    "New York Jets": "NYJ",
    "Philadelphia Eagles": "PHI",
    "Pittsburgh Steelers": "PIT",
    "San Francisco 49ers": "SF",
    "Seattle Seahawks": "SEA",
    "Tampa Bay Buccaneers": "TB",
    "Tennessee Titans": "TEN",
    "Washington Commanders": "WAS",
}

# Valid base positions
_VALID_POSITIONS = {"QB", "RB", "WR", "TE", "K", "DST"}

# Aliases that map to canonical position names
_POSITION_ALIASES = {
    "PK": "K",
    "DEF": "DST",
}

# Regex: one or more letters followed by optional digits
_POS_PATTERN = re.compile(r"^([A-Za-z]+?)(\d+)?$")

_TEAM_LOOKUP = {name.casefold(): abbr for name, abbr in TEAM_NAME_TO_ABBR.items()}

# Curly apostrophes and long dashes -> ASCII
_NAME_PUNCTUATION = str.maketrans({
    "\u2019": "'",
    "\u2018": "'",
    "\u02bc": "'",
    "\u2013": "-",
    "\u2014": "-",
})


class DataCleaner:
    """Cleans and standardizes player rows before valuation."""

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------
    @staticmethod
    def extract_base_position(pos_str: str) -> Optional[str]:
        """Extract the base position from a rank-embedded string.

        Examples:
            "WR1"  -> "WR"
            "RB23" -> "RB"
            "D/ST" -> "DST"
            "PK"   -> "K"
        """
        if pd.isna(pos_str):
            return None

        cleaned = str(pos_str).strip().replace("/", "")
        m = _POS_PATTERN.match(cleaned)
        if not m:
            return None

        letters = m.group(1).upper()
        canonical = _POSITION_ALIASES.get(letters, letters)
        return canonical if canonical in _VALID_POSITIONS else None

    # ------------------------------------------------------------------
    # Team name standardization
    # ------------------------------------------------------------------
    @staticmethod
    def standardize_team_name(team: str) -> Optional[str]:
        """Map a full team name to its abbreviation, ignoring case.

        Anything not in the table (already an abbreviation, a free agent
        marker) passes through unchanged. Blank values become None.
        """
        if pd.isna(team):
            return None
        team = str(team).strip().strip('"')
        if not team:
            return None
        return _TEAM_LOOKUP.get(team.casefold(), team)

    # ------------------------------------------------------------------
    # Player name normalization
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_player_name(name: str) -> Optional[str]:
        """Normalize a player name so projections and draft picks match.

        Curly apostrophes and en/em dashes become their ASCII forms and
        runs of whitespace collapse to one space. Suffixes are kept.
        """
        if pd.isna(name):
            return None
        name = str(name).strip().strip('"').translate(_NAME_PUNCTUATION)
        name = " ".join(name.split())
        return name or None

    def normalize_drafted_names(self, names: Iterable[str]) -> List[str]:
        """Normalize drafted-player names the same way as pool names.

        Blank entries are dropped.
        """
        normalized = [self.normalize_player_name(n) for n in names]
        return [n for n in normalized if n]

    # ------------------------------------------------------------------
    # DataFrame-level cleaning
    # ------------------------------------------------------------------
    def clean_players(self, df: pd.DataFrame) -> pd.DataFrame:
        """Clean an ingested player DataFrame.

        Normalizes Player, Position and Team in place of the raw values and
        returns only the canonical columns. For DSTs without a team, the
        team is derived from the player name ("Denver Broncos" -> "DEN").
        Rows whose position is not recognized keep ``Position = None``;
        the player pool drops them.
        """
        out = df.copy()
        out["Player"] = out["Player"].apply(self.normalize_player_name)
        out["Position"] = out["Position"].apply(self.extract_base_position)

        if "Team" not in out.columns:
            out["Team"] = None
        out["Team"] = out["Team"].apply(self.standardize_team_name)
        dst_no_team = (out["Position"] == "DST") & out["Team"].isna()
        out.loc[dst_no_team, "Team"] = (
            out.loc[dst_no_team, "Player"].apply(self.standardize_team_name)
        )

        if "Rank" not in out.columns:
            out["Rank"] = float("nan")
        if "Source_Row" not in out.columns:
            out["Source_Row"] = range(len(out))

        unknown = out["Position"].isna().sum()
        if unknown:
            logger.warning("%d rows have an unrecognized position", unknown)
        logger.info("Cleaned players: %d rows", len(out))
        return out[PLAYER_COLUMNS]
