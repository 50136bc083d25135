"""Superflex / Flex starter allocation.

Bonus slots (SF, FLEX) can be filled from several true positions. Before
any baseline can be computed we need to know how many extra starters each
position supplies. The allocator answers that greedily: pool every eligible
player that is not already claimed, take the best N by projection and count
where they came from.

SF is resolved first and its claims are carried into the Flex phase, so a
player can never be counted by both.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from src.valuation.models import (
    SLOT_ELIGIBILITY,
    SLOT_PHASES,
    AllocationResult,
    LeagueConfig,
    PositionAllocation,
    Position,
    SlotType,
)
from src.valuation.player_pool import PlayerPool

logger = logging.getLogger(__name__)


class StarterAllocator:
    """Resolve which positions supply the league's SF and Flex starters."""

    def allocate(
        self,
        pool: PlayerPool,
        eligible: Iterable[Position],
        claimed: Dict[Position, int],
        slot_count: int,
    ) -> Dict[Position, int]:
        """Hand out *slot_count* bonus slots across *eligible* positions.

        Args:
            pool: The player pool.
            eligible: Positions allowed to fill this slot type.
            claimed: Players already used per position (the top
                ``claimed[pos]`` players at each position are skipped).
            slot_count: League-wide number of slots to fill.

        Returns:
            Dict mapping each eligible position to the number of slots it
            received. The counts sum to ``min(slot_count, remaining)``.
        """
        eligible = tuple(eligible)
        allocation = {pos: 0 for pos in eligible}
        if slot_count <= 0:
            return allocation

        candidates: List[Tuple[float, Position]] = []
        for pos in eligible:
            start = claimed.get(pos, 0)
            candidates.extend((p.points, pos) for p in pool.at(pos)[start:])

        candidates.sort(key=lambda c: c[0], reverse=True)
        for _, pos in candidates[:slot_count]:
            allocation[pos] += 1

        if len(candidates) < slot_count:
            logger.debug(
                "Only %d eligible players remain for %d bonus slots",
                len(candidates), slot_count,
            )
        return allocation

    def allocate_bonus_slots(
        self, pool: PlayerPool, league: LeagueConfig
    ) -> AllocationResult:
        """Run the SF phase then the Flex phase and build the full allocation."""
        claimed = {pos: league.direct_starters(pos) for pos in Position}
        bonus: Dict[SlotType, Dict[Position, int]] = {}

        for slot in SLOT_PHASES:
            filled = self.allocate(
                pool,
                SLOT_ELIGIBILITY[slot],
                claimed,
                league.slot_count(slot),
            )
            for pos, count in filled.items():
                claimed[pos] += count
            bonus[slot] = filled
            logger.debug(
                "%s allocation: %s",
                slot.value,
                ", ".join(f"{pos.value}={n}" for pos, n in filled.items()),
            )

        by_position = {
            pos: PositionAllocation(
                direct=league.direct_starters(pos),
                sf=bonus[SlotType.SF].get(pos, 0),
                flex=bonus[SlotType.FLEX].get(pos, 0),
                bench=league.bench_count(pos),
            )
            for pos in Position
        }
        return AllocationResult(by_position=by_position)
