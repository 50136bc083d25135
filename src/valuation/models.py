"""Data models for the valuation engine."""

import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Dict, List, Optional

from src.valuation.config import DEFAULT_NUM_TEAMS, DEFAULT_POSITION_REQUIREMENTS


class Position(str, Enum):
    """A player's true position (never a roster slot)."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    DST = "DST"
    K = "K"

    @classmethod
    def parse(cls, code) -> Optional["Position"]:
        """Return the position for *code*, or None if it is not supported."""
        if code is None:
            return None
        try:
            return cls(str(code).strip().upper())
        except ValueError:
            return None


class SlotType(str, Enum):
    """Bonus starting slots that draw from several true positions."""

    SF = "SF"
    FLEX = "FLEX"


# Which true positions may fill each bonus slot
SLOT_ELIGIBILITY = {
    SlotType.SF: (Position.QB, Position.RB, Position.WR, Position.TE),
    SlotType.FLEX: (Position.RB, Position.WR, Position.TE),
}

# Bonus slots are resolved in this order; later phases see earlier claims
SLOT_PHASES = (SlotType.SF, SlotType.FLEX)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round *value* to *digits* places, ties away from zero."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def to_number(value, default: float = 0.0) -> float:
    """Parse *value* as a float, returning *default* on failure or NaN."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).replace(",", "").strip())
    except ValueError:
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


@dataclass(frozen=True)
class Player:
    """A single player as read from the projection source."""

    name: str
    position: Position
    points: float
    team: Optional[str] = None
    rank: Optional[int] = None
    source_row: Optional[int] = None  # Row reference for write-back

    @property
    def key(self) -> str:
        """Case-insensitive identity used for drafted-status matching."""
        return self.name.casefold()


@dataclass(frozen=True)
class PositionRequirement:
    """Per-team starters and bench depth for one position or bonus slot."""

    starters: float = 0.0
    bench: float = 0.0

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> "PositionRequirement":
        data = data or {}
        return cls(
            starters=max(to_number(data.get("starters")), 0.0),
            bench=max(to_number(data.get("bench")), 0.0),
        )


@dataclass(frozen=True)
class LeagueConfig:
    """League size plus roster requirements for every position and bonus slot."""

    num_teams: int = DEFAULT_NUM_TEAMS
    positions: Dict[Position, PositionRequirement] = field(default_factory=dict)
    bonus_slots: Dict[SlotType, PositionRequirement] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.num_teams, int) or self.num_teams < 1:
            raise ValueError(
                f"num_teams must be a positive integer, got {self.num_teams!r}"
            )

    @classmethod
    def from_dict(cls, data: Dict) -> "LeagueConfig":
        """Build a config from ``{"num_teams": N, "positions": {code: {...}}}``.

        Unknown codes are ignored, missing ones get zero requirements and a
        missing or invalid team count falls back to the default. Settings
        with no ``positions`` block get the default superflex roster.
        """
        teams = to_number(data.get("num_teams"), default=0)
        num_teams = int(teams) if teams >= 1 else DEFAULT_NUM_TEAMS

        raw_positions = data.get("positions")
        if raw_positions is None:
            raw_positions = DEFAULT_POSITION_REQUIREMENTS
        positions: Dict[Position, PositionRequirement] = {}
        bonus_slots: Dict[SlotType, PositionRequirement] = {}
        for code, requirement in raw_positions.items():
            code = str(code).strip().upper()
            if code in SlotType.__members__:
                bonus_slots[SlotType(code)] = PositionRequirement.from_dict(requirement)
                continue
            position = Position.parse(code)
            if position is not None:
                positions[position] = PositionRequirement.from_dict(requirement)

        return cls(num_teams=num_teams, positions=positions, bonus_slots=bonus_slots)

    def requirement(self, position: Position) -> PositionRequirement:
        return self.positions.get(position, PositionRequirement())

    def league_count(self, per_team: float) -> int:
        """League-wide count for a per-team amount (may be fractional)."""
        return int(round_half_up(per_team * self.num_teams))

    def direct_starters(self, position: Position) -> int:
        return self.league_count(self.requirement(position).starters)

    def bench_count(self, position: Position) -> int:
        return self.league_count(self.requirement(position).bench)

    def slot_count(self, slot: SlotType) -> int:
        """League-wide number of bonus slots of type *slot*."""
        return self.league_count(
            self.bonus_slots.get(slot, PositionRequirement()).starters
        )


@dataclass(frozen=True)
class PositionAllocation:
    """How many starting slots one true position fills, by source."""

    direct: int = 0
    sf: int = 0
    flex: int = 0
    bench: int = 0

    @property
    def total(self) -> int:
        return self.direct + self.sf + self.flex


@dataclass(frozen=True)
class AllocationResult:
    """Starter allocation for every true position."""

    by_position: Dict[Position, PositionAllocation]

    def __getitem__(self, position: Position) -> PositionAllocation:
        return self.by_position.get(position, PositionAllocation())

    def slot_totals(self) -> Dict[str, int]:
        """League-wide slots handed out by source, e.g. ``{"sf": 12, ...}``."""
        allocations = self.by_position.values()
        return {
            "direct": sum(a.direct for a in allocations),
            "sf": sum(a.sf for a in allocations),
            "flex": sum(a.flex for a in allocations),
        }


@dataclass(frozen=True)
class PositionBaseline:
    """VOR / VOLS reference points for one position."""

    replacement_level: float
    last_starter_level: float


@dataclass(frozen=True)
class BaselineSet:
    by_position: Dict[Position, PositionBaseline]

    def __getitem__(self, position: Position) -> PositionBaseline:
        return self.by_position.get(position, PositionBaseline(0.0, 0.0))


@dataclass(frozen=True)
class PlayerValuation:
    """Computed VOR / VOLS annotation for a single player."""

    player: Player
    vor: float
    vols: float


@dataclass(frozen=True)
class ValuationResult:
    """Everything produced by one valuation pass."""

    allocation: AllocationResult
    baselines: BaselineSet
    valuations: List[PlayerValuation]

    def by_name(self) -> Dict[str, PlayerValuation]:
        return {v.player.key: v for v in self.valuations}
