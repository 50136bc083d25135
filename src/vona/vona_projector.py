"""Value Over Next Available (VONA) projection.

Answers "if I pass on this player now, what will the best player at the same
position be worth when I pick again?". For each position:

1. Estimate how many players at the position go before the target pick:
   ``floor(picks_until_target * draft_rate)``.
2. The expected value at the target pick is the mean projection of a small
   window around that index in the available pool. When nobody at the
   position is expected to go, it is simply the current best player.
3. ``VONA = points - expected_value[position]``.

Alongside the per-player board the projector reports, per position, the gap
between the best available player and the expected value, a scarcity index,
a tier-break classification and a draft-now / wait recommendation.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence

import pandas as pd

from src.valuation.models import LeagueConfig, Position, round_half_up
from src.valuation.player_pool import PlayerPool
from src.vona.config import (
    EXPECTED_VALUE_WINDOW,
    INSIGHT_SCARCE_POSITIONS,
    INSIGHT_TOP_PLAYERS,
    NO_PLAYERS_RECOMMENDATION,
    RECOMMENDATION_DEFAULT,
    RECOMMENDATION_THRESHOLDS,
    SCARCITY_DEPTH_DAMPING,
    SCARCITY_NEXT_COUNT,
    SCARCITY_TOP_COUNT,
    TIER_BREAK_DEFAULT,
    TIER_BREAK_NEXT_COUNT,
    TIER_BREAK_THRESHOLDS,
)
from src.vona.draft_rate import DraftRateModel
from src.vona.models import DraftState, PlayerVONA, PositionOutlook, VONAResult

logger = logging.getLogger(__name__)

OUTLOOK_COLUMNS = [
    "Position", "Current_Best", "Current_Best_FPTS", "Expected_At_Pick",
    "Gap", "Scarcity", "Tier_Break", "Players_Remaining", "Recommendation",
]
BOARD_COLUMNS = ["Player", "Team", "Position", "FPTS", "Expected_Value", "VONA"]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


class VONAProjector:
    """Project positional value at a future pick and score players by VONA."""

    def __init__(self, rate_model: Optional[DraftRateModel] = None):
        self.rate_model = rate_model or DraftRateModel()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def project(
        self,
        pool: PlayerPool,
        draft_state: DraftState,
        target_pick: int,
        league: LeagueConfig,
    ) -> VONAResult:
        """Run a VONA pass for *target_pick*.

        Args:
            pool: Full player pool; drafted players are removed here.
            draft_state: Drafted names and number of picks made.
            target_pick: Overall pick number (1-based) to project to.
            league: League settings (team count drives the draft round).

        Returns:
            :class:`VONAResult` with the priority board, per-position
            outlook and insight strings.

        Raises:
            ValueError: if *target_pick* is not a positive integer.
        """
        if not isinstance(target_pick, int) or target_pick < 1:
            raise ValueError(f"target_pick must be a positive integer, got {target_pick!r}")

        available = pool.available(draft_state.drafted_names)
        picks_until_target = max(target_pick - draft_state.picks_made - 1, 0)
        current_pick = draft_state.current_pick
        draft_round = self.rate_model.draft_round(current_pick, league.num_teams)

        expected: Dict[Position, float] = {}
        outlook: Dict[Position, PositionOutlook] = {}
        for position in Position:
            points = available.points(position)
            rate = self.rate_model.rate(position, current_pick, league.num_teams)
            # Round away float noise (e.g. 10 * 0.3) before flooring
            expected_drafted = math.floor(round(picks_until_target * rate, 9))
            expected[position] = self.expected_value(points, expected_drafted)
            outlook[position] = self._position_outlook(
                position, available, expected[position], rate, expected_drafted
            )
            logger.debug(
                "VONA %s: rate=%.3f, expected drafted=%d, expected value=%.1f",
                position.value, rate, expected_drafted, expected[position],
            )

        board = [
            PlayerVONA(
                player=player,
                expected_value=expected[player.position],
                vona=player.points - expected[player.position],
            )
            for player in available
        ]
        board.sort(key=lambda e: (-e.vona, -e.player.points, e.player.name))

        result = VONAResult(
            target_pick=target_pick,
            picks_until_target=picks_until_target,
            draft_round=draft_round,
            board=board,
            outlook=outlook,
        )
        result.insights = self.build_insights(result)

        logger.info(
            "VONA projection to pick %d: %d picks away, round %d, %d players available",
            target_pick, picks_until_target, draft_round, len(available),
        )
        return result

    # ------------------------------------------------------------------
    # Position metrics
    # ------------------------------------------------------------------

    @staticmethod
    def expected_value(points: Sequence[float], expected_drafted: int) -> float:
        """Expected best projection left at a position after *expected_drafted* picks.

        Averages the players within ``EXPECTED_VALUE_WINDOW`` of the expected
        index to smooth single-player noise.
        """
        if not points:
            return 0.0
        if expected_drafted <= 0:
            return points[0]
        index = min(expected_drafted, len(points) - 1)
        low = max(0, index - EXPECTED_VALUE_WINDOW)
        high = min(len(points) - 1, index + EXPECTED_VALUE_WINDOW)
        return _mean(points[low:high + 1])

    @staticmethod
    def scarcity_index(points: Sequence[float]) -> float:
        """Relative top-tier drop-off, damped by how many players remain."""
        top_avg = _mean(points[:SCARCITY_TOP_COUNT])
        if top_avg <= 0:
            return 0.0
        next_avg = _mean(points[SCARCITY_TOP_COUNT:SCARCITY_TOP_COUNT + SCARCITY_NEXT_COUNT])
        drop = (top_avg - next_avg) / top_avg
        return drop * SCARCITY_DEPTH_DAMPING / (len(points) + SCARCITY_DEPTH_DAMPING)

    @staticmethod
    def tier_break(points: Sequence[float]) -> str:
        """Classify the drop from the top-3 average to the next-3 average."""
        top_avg = _mean(points[:SCARCITY_TOP_COUNT])
        if top_avg <= 0:
            return TIER_BREAK_DEFAULT
        next_avg = _mean(points[SCARCITY_TOP_COUNT:SCARCITY_TOP_COUNT + TIER_BREAK_NEXT_COUNT])
        drop_pct = (top_avg - next_avg) / top_avg * 100
        for threshold, label in TIER_BREAK_THRESHOLDS:
            if drop_pct > threshold:
                return label
        return TIER_BREAK_DEFAULT

    @staticmethod
    def recommendation(gap: float) -> str:
        for threshold, label in RECOMMENDATION_THRESHOLDS:
            if gap > threshold:
                return label
        return RECOMMENDATION_DEFAULT

    def _position_outlook(
        self,
        position: Position,
        available: PlayerPool,
        expected_value: float,
        rate: float,
        expected_drafted: int,
    ) -> PositionOutlook:
        players = available.at(position)
        if not players:
            return PositionOutlook(
                position=position,
                current_best=None,
                expected_at_pick=0.0,
                gap=0.0,
                scarcity=0.0,
                tier_break="N/A",
                players_remaining=0,
                recommendation=NO_PLAYERS_RECOMMENDATION,
                draft_rate=rate,
                expected_drafted=expected_drafted,
            )

        points = [p.points for p in players]
        gap = players[0].points - expected_value
        return PositionOutlook(
            position=position,
            current_best=players[0],
            expected_at_pick=expected_value,
            gap=gap,
            scarcity=self.scarcity_index(points),
            tier_break=self.tier_break(points),
            players_remaining=len(players),
            recommendation=self.recommendation(gap),
            draft_rate=rate,
            expected_drafted=expected_drafted,
        )

    # ------------------------------------------------------------------
    # Insights and reports
    # ------------------------------------------------------------------

    @staticmethod
    def build_insights(result: VONAResult) -> List[str]:
        """Short natural-language takeaways from a VONA pass."""
        insights: List[str] = []
        stocked = [o for o in result.outlook.values() if o.current_best is not None]

        if stocked:
            top_gap = max(stocked, key=lambda o: o.gap)
            insights.append(
                f"Biggest drop-off by pick {result.target_pick}: {top_gap.position.value} "
                f"({top_gap.current_best.name} {top_gap.current_best.points:.1f} now vs. "
                f"{top_gap.expected_at_pick:.1f} expected, gap {top_gap.gap:.1f})"
            )

        scarce = sorted(
            (o for o in stocked if o.scarcity > 0),
            key=lambda o: o.scarcity,
            reverse=True,
        )[:INSIGHT_SCARCE_POSITIONS]
        if scarce:
            insights.append(
                "Scarcest positions: "
                + ", ".join(f"{o.position.value} ({o.scarcity:.3f})" for o in scarce)
            )

        if result.board:
            insights.append(
                "Top VONA: "
                + ", ".join(
                    f"{e.player.name} ({e.player.position.value}, {e.vona:+.1f})"
                    for e in result.board[:INSIGHT_TOP_PLAYERS]
                )
            )

        safe = [o.position.value for o in stocked if o.recommendation == RECOMMENDATION_DEFAULT]
        if safe:
            insights.append("Safe to wait on: " + ", ".join(safe))

        return insights

    @staticmethod
    def outlook_report(result: VONAResult) -> pd.DataFrame:
        """Per-position outlook table."""
        rows = []
        for position in Position:
            o = result.outlook[position]
            rows.append({
                "Position": position.value,
                "Current_Best": o.current_best.name if o.current_best else None,
                "Current_Best_FPTS": o.current_best.points if o.current_best else 0.0,
                "Expected_At_Pick": round_half_up(o.expected_at_pick, 1),
                "Gap": round_half_up(o.gap, 1),
                "Scarcity": o.scarcity,
                "Tier_Break": o.tier_break,
                "Players_Remaining": o.players_remaining,
                "Recommendation": o.recommendation,
            })
        return pd.DataFrame(rows, columns=OUTLOOK_COLUMNS)

    @staticmethod
    def board_frame(result: VONAResult) -> pd.DataFrame:
        """Priority board, highest VONA first."""
        rows = [
            {
                "Player": e.player.name,
                "Team": e.player.team,
                "Position": e.player.position.value,
                "FPTS": e.player.points,
                "Expected_Value": round_half_up(e.expected_value, 1),
                "VONA": round_half_up(e.vona, 1),
            }
            for e in result.board
        ]
        return pd.DataFrame(rows, columns=BOARD_COLUMNS)
