"""Replacement-level and last-starter-level baselines.

For each position:

* **Last-starter level** (VOLS baseline) is the projection of the weakest
  starter, i.e. the player at index ``total_starters - 1``.
* **Replacement level** (VOR baseline) is the projection of the first
  player beyond starters and bench, i.e. index
  ``total_starters + total_bench``.

When a pool is too shallow for either index, the worst available player is
used instead; an empty pool yields 0.
"""

import logging
from typing import Sequence

from src.valuation.models import (
    AllocationResult,
    BaselineSet,
    Position,
    PositionBaseline,
)
from src.valuation.player_pool import PlayerPool

logger = logging.getLogger(__name__)


class BaselineCalculator:
    """Compute VOR and VOLS baselines for every true position."""

    @staticmethod
    def last_starter_level(points: Sequence[float], total_starters: int) -> float:
        if not points:
            return 0.0
        if 0 < total_starters <= len(points):
            return points[total_starters - 1]
        return points[-1]

    @staticmethod
    def replacement_level(
        points: Sequence[float], total_starters: int, total_bench: int
    ) -> float:
        if not points:
            return 0.0
        index = total_starters + total_bench
        if index < len(points):
            return points[index]
        return points[-1]

    def calculate(self, pool: PlayerPool, allocation: AllocationResult) -> BaselineSet:
        baselines = {}
        for position in Position:
            points = pool.points(position)
            slots = allocation[position]

            baseline = PositionBaseline(
                replacement_level=self.replacement_level(
                    points, slots.total, slots.bench
                ),
                last_starter_level=self.last_starter_level(points, slots.total),
            )
            baselines[position] = baseline

            if len(points) < slots.total + slots.bench + 1:
                logger.debug(
                    "%s pool is shallow (%d players for %d starters + %d bench)",
                    position.value, len(points), slots.total, slots.bench,
                )
            logger.debug(
                "Baseline %s: replacement=%.1f, last starter=%.1f",
                position.value,
                baseline.replacement_level,
                baseline.last_starter_level,
            )

        return BaselineSet(by_position=baselines)
