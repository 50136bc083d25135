"""Data models for the VONA projector."""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional

from src.valuation.models import Player, Position


@dataclass(frozen=True)
class DraftState:
    """Snapshot of a live draft: who is gone and how many picks were made."""

    drafted_names: FrozenSet[str] = frozenset()
    picks_made: int = 0

    @classmethod
    def from_names(
        cls, names: Iterable[str], picks_made: Optional[int] = None
    ) -> "DraftState":
        """Build a state from drafted names.

        Names are matched case-insensitively. ``picks_made`` defaults to the
        number of distinct drafted names.
        """
        drafted = frozenset(
            str(n).strip().casefold() for n in names if str(n).strip()
        )
        if picks_made is None:
            picks_made = len(drafted)
        return cls(drafted_names=drafted, picks_made=picks_made)

    @property
    def current_pick(self) -> int:
        """The pick currently on the clock (1-based)."""
        return self.picks_made + 1


@dataclass(frozen=True)
class PlayerVONA:
    """VONA for a single available player."""

    player: Player
    expected_value: float  # Expected best value at the player's position at the target pick
    vona: float


@dataclass(frozen=True)
class PositionOutlook:
    """How a position is expected to look at the target pick."""

    position: Position
    current_best: Optional[Player]
    expected_at_pick: float
    gap: float
    scarcity: float
    tier_break: str
    players_remaining: int
    recommendation: str
    draft_rate: float = 0.0
    expected_drafted: int = 0


@dataclass
class VONAResult:
    """Output of one VONA pass."""

    target_pick: int
    picks_until_target: int
    draft_round: int
    board: List[PlayerVONA] = field(default_factory=list)
    outlook: Dict[Position, PositionOutlook] = field(default_factory=dict)
    insights: List[str] = field(default_factory=list)
