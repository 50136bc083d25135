"""Player pool grouped by true position.

The pool is rebuilt from the source rows on every calculation run and is
never mutated afterwards; filtering (e.g. removing drafted players) returns
a new pool.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Tuple

import pandas as pd

from src.valuation.models import Player, Position, to_number

logger = logging.getLogger(__name__)

# Columns a player frame must provide
REQUIRED_COLUMNS = ("Player", "Position", "FPTS")


class ConfigurationError(Exception):
    """Raised when required player data is missing."""


class PlayerPool:
    """Players grouped by true position, each group sorted by points (desc)."""

    def __init__(self, players: Iterable[Player]):
        self._players: Tuple[Player, ...] = tuple(players)
        grouped: Dict[Position, List[Player]] = {pos: [] for pos in Position}
        for player in self._players:
            grouped[player.position].append(player)
        # sorted() is stable, so equal projections keep their input order
        self._by_position: Dict[Position, Tuple[Player, ...]] = {
            pos: tuple(sorted(group, key=lambda p: p.points, reverse=True))
            for pos, group in grouped.items()
        }

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_frame(cls, players_df: pd.DataFrame) -> "PlayerPool":
        """Build a pool from a cleaned player DataFrame.

        Expects ``Player``, ``Position`` and ``FPTS`` columns; ``Team``,
        ``Rank`` and ``Source_Row`` are optional. When ``Source_Row`` is
        absent the frame index is used as the row reference.

        Raises:
            ConfigurationError: if a required column is missing.
        """
        missing = [col for col in REQUIRED_COLUMNS if col not in players_df.columns]
        if missing:
            raise ConfigurationError(
                f"Player data is missing required column(s): {', '.join(missing)}"
            )

        players: List[Player] = []
        skipped_positions: List[str] = []
        for index, row in players_df.iterrows():
            name = row["Player"]
            if pd.isna(name) or str(name).strip() == "":
                continue
            name = str(name).strip()

            position = Position.parse(None if pd.isna(row["Position"]) else row["Position"])
            if position is None:
                skipped_positions.append(name)
                continue

            team = row.get("Team")
            rank = to_number(row.get("Rank"), default=float("nan"))
            source_row = row.get("Source_Row", index)
            players.append(Player(
                name=name,
                position=position,
                points=to_number(row["FPTS"]),
                team=None if team is None or pd.isna(team) else str(team),
                rank=None if pd.isna(rank) else int(rank),
                source_row=int(source_row) if not pd.isna(source_row) else int(index),
            ))

        if skipped_positions:
            logger.warning(
                "Dropping %d players with no supported position: %s",
                len(skipped_positions), skipped_positions,
            )
        logger.debug("Built player pool with %d players", len(players))
        return cls(players)

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._players)

    def __iter__(self) -> Iterator[Player]:
        return iter(self._players)

    def at(self, position: Position) -> Tuple[Player, ...]:
        """Players at *position*, best projection first."""
        return self._by_position.get(position, ())

    def points(self, position: Position) -> List[float]:
        """Projected points at *position*, descending."""
        return [p.points for p in self.at(position)]

    def size(self, position: Position) -> int:
        return len(self.at(position))

    def available(self, drafted_names: Iterable[str]) -> "PlayerPool":
        """Return a new pool without the drafted players (case-insensitive)."""
        drafted = {name.strip().casefold() for name in drafted_names}
        return PlayerPool(p for p in self._players if p.key not in drafted)
