"""Round-sensitive draft-rate heuristic.

Estimates the share of upcoming picks that will be spent on each position.
A fixed base rate per position is scaled by a multiplier that depends on the
draft phase:

* early rounds (1-3): RB/WR go faster, K/DST almost never go
* middle rounds (4-8): QB/TE pick up
* late rounds (9+): K/DST start going

All numbers are tunable through :class:`DraftRateModel`; the defaults live in
``src.vona.config``.
"""

import math
from dataclasses import dataclass, field
from typing import Dict

from src.valuation.models import Position
from src.vona.config import (
    BASE_DRAFT_RATES,
    EARLY_ROUND_MAX,
    MAX_DRAFT_RATE,
    MIDDLE_ROUND_MAX,
    ROUND_RATE_MULTIPLIERS,
)


def _default_base_rates() -> Dict[str, float]:
    return dict(BASE_DRAFT_RATES)


def _default_multipliers() -> Dict[str, Dict[str, float]]:
    return {phase: dict(m) for phase, m in ROUND_RATE_MULTIPLIERS.items()}


@dataclass(frozen=True)
class DraftRateModel:
    """Tunable parameters for the draft-rate heuristic."""

    base_rates: Dict[str, float] = field(default_factory=_default_base_rates)
    round_multipliers: Dict[str, Dict[str, float]] = field(
        default_factory=_default_multipliers
    )
    early_round_max: int = EARLY_ROUND_MAX
    middle_round_max: int = MIDDLE_ROUND_MAX
    max_rate: float = MAX_DRAFT_RATE

    @staticmethod
    def draft_round(current_pick: int, num_teams: int) -> int:
        """Round of *current_pick* (1-based) in a *num_teams* league."""
        return max(1, math.ceil(current_pick / num_teams))

    def phase(self, draft_round: int) -> str:
        if draft_round <= self.early_round_max:
            return "early"
        if draft_round <= self.middle_round_max:
            return "middle"
        return "late"

    def rate(self, position: Position, current_pick: int, num_teams: int) -> float:
        """Fraction of upcoming picks expected to go to *position*."""
        phase = self.phase(self.draft_round(current_pick, num_teams))
        base = self.base_rates.get(position.value, 0.0)
        multiplier = self.round_multipliers.get(phase, {}).get(position.value, 1.0)
        return min(base * multiplier, self.max_rate)
