"""VOR / VOLS valuation pass.

Ties the pieces together: player pool -> starter allocation -> baselines,
then annotates every player with

* ``VOR  = points - replacement_level[position]``
* ``VOLS = points - last_starter_level[position]``

both rounded to one decimal. The pass is pure: running it twice on the same
inputs gives the same output, and input frames are never modified.
"""

import logging
from typing import Optional

import pandas as pd

from src.valuation.baseline_calculator import BaselineCalculator
from src.valuation.config import VALUE_PRECISION
from src.valuation.models import (
    LeagueConfig,
    PlayerValuation,
    Position,
    ValuationResult,
    round_half_up,
)
from src.valuation.player_pool import PlayerPool
from src.valuation.starter_allocator import StarterAllocator

logger = logging.getLogger(__name__)

REPORT_COLUMNS = [
    "Position", "Direct", "SF", "Flex", "Total", "Bench",
    "Replacement_Level", "Last_Starter_Level",
]


class ValuationService:
    """Compute VOR and VOLS for every player in a pool."""

    def __init__(
        self,
        allocator: Optional[StarterAllocator] = None,
        baseline_calculator: Optional[BaselineCalculator] = None,
    ):
        self.allocator = allocator or StarterAllocator()
        self.baseline_calculator = baseline_calculator or BaselineCalculator()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def evaluate(self, pool: PlayerPool, league: LeagueConfig) -> ValuationResult:
        """Run allocation and baselines, then value every player in *pool*."""
        allocation = self.allocator.allocate_bonus_slots(pool, league)
        baselines = self.baseline_calculator.calculate(pool, allocation)

        valuations = []
        for player in pool:
            baseline = baselines[player.position]
            valuations.append(PlayerValuation(
                player=player,
                vor=round_half_up(
                    player.points - baseline.replacement_level, VALUE_PRECISION
                ),
                vols=round_half_up(
                    player.points - baseline.last_starter_level, VALUE_PRECISION
                ),
            ))

        logger.info(
            "Valued %d players (%d-team league, %s bonus slots)",
            len(valuations),
            league.num_teams,
            allocation.slot_totals(),
        )
        return ValuationResult(
            allocation=allocation,
            baselines=baselines,
            valuations=valuations,
        )

    def annotate_frame(
        self,
        players_df: pd.DataFrame,
        league: LeagueConfig,
        result: Optional[ValuationResult] = None,
    ) -> pd.DataFrame:
        """Return a copy of *players_df* with ``VOR`` and ``VOLS`` columns.

        Values are written back against each row's ``Source_Row`` (or the
        frame index when that column is absent). Rows that could not be
        valued, e.g. unsupported positions, get NaN.

        Pass *result* when the frame was already evaluated to skip a second
        valuation run.
        """
        if result is None:
            result = self.evaluate(PlayerPool.from_frame(players_df), league)
        vor_by_row = {v.player.source_row: v.vor for v in result.valuations}
        vols_by_row = {v.player.source_row: v.vols for v in result.valuations}

        out = players_df.copy()
        if "Source_Row" in out.columns:
            row_refs = out["Source_Row"]
        else:
            row_refs = pd.Series(out.index, index=out.index)
        out["VOR"] = row_refs.map(vor_by_row)
        out["VOLS"] = row_refs.map(vols_by_row)
        return out

    @staticmethod
    def allocation_report(result: ValuationResult) -> pd.DataFrame:
        """Per-position allocation and baseline table."""
        rows = []
        for position in Position:
            slots = result.allocation[position]
            baseline = result.baselines[position]
            rows.append({
                "Position": position.value,
                "Direct": slots.direct,
                "SF": slots.sf,
                "Flex": slots.flex,
                "Total": slots.total,
                "Bench": slots.bench,
                "Replacement_Level": baseline.replacement_level,
                "Last_Starter_Level": baseline.last_starter_level,
            })
        return pd.DataFrame(rows, columns=REPORT_COLUMNS)
