"""Shared fixtures for the valuation test suite."""

import pandas as pd
import pytest

from src.data_pipeline.cleaning import DataCleaner
from src.data_pipeline.ingestion import ProjectionIngester
from src.valuation.baseline_calculator import BaselineCalculator
from src.valuation.config import DEFAULT_POSITION_REQUIREMENTS
from src.valuation.models import LeagueConfig
from src.valuation.player_pool import PlayerPool
from src.valuation.starter_allocator import StarterAllocator
from src.valuation.valuation_service import ValuationService
from src.vona.vona_projector import VONAProjector


# ------------------------------------------------------------------
# Synthetic data builders
# ------------------------------------------------------------------

def _make_players_df(points_by_position: dict) -> pd.DataFrame:
    """Build a player frame from ``{"QB": [300, 290, ...], ...}``.

    Names are ``<POS>_<i>`` with *i* the position rank (0-based).
    """
    rows = []
    for position, points in points_by_position.items():
        for i, fpts in enumerate(points):
            rows.append({
                "Rank": len(rows) + 1,
                "Player": f"{position}_{i}",
                "Team": "TST",
                "Position": position,
                "FPTS": fpts,
            })
    df = pd.DataFrame(rows, columns=["Rank", "Player", "Team", "Position", "FPTS"])
    df["Source_Row"] = range(len(df))
    return df


def _make_pool(points_by_position: dict) -> PlayerPool:
    return PlayerPool.from_frame(_make_players_df(points_by_position))


def _make_league(num_teams: int = 12, **positions) -> LeagueConfig:
    """League with only the given requirements, e.g. ``QB=(1, 1), SF=(1, 0)``."""
    return LeagueConfig.from_dict({
        "num_teams": num_teams,
        "positions": {
            code: {"starters": starters, "bench": bench}
            for code, (starters, bench) in positions.items()
        },
    })


# ------------------------------------------------------------------
# Lightweight factories – cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture(scope="module")
def cleaner():
    return DataCleaner()


@pytest.fixture
def ingester(tmp_path):
    """Ingester resolving relative names against a per-test temp dir."""
    return ProjectionIngester(tmp_path)


@pytest.fixture(scope="module")
def allocator():
    return StarterAllocator()


@pytest.fixture(scope="module")
def baseline_calculator():
    return BaselineCalculator()


@pytest.fixture(scope="module")
def valuation_service():
    return ValuationService()


@pytest.fixture(scope="module")
def projector():
    return VONAProjector()


@pytest.fixture(scope="module")
def default_league():
    """12 teams, QB{1,1} RB{2,2.5} WR{2,3} TE{1,1} FLEX{1} SF{1} DST{1,.5} K{1,.5}."""
    return LeagueConfig.from_dict({
        "num_teams": 12,
        "positions": DEFAULT_POSITION_REQUIREMENTS,
    })


@pytest.fixture(scope="module")
def superflex_points():
    """Deterministic, tie-free pools sized for the default league.

    With the default league the SF phase hands all 12 slots to QBs and the
    Flex phase splits 8 RB / 4 WR.
    """
    return {
        "QB": [400 - 5 * i for i in range(40)],
        "RB": [300 - 2 * i for i in range(80)],
        "WR": [291 - 2 * i for i in range(80)],
        "TE": [200 - 3 * i for i in range(30)],
        "DST": [100 - 2 * i for i in range(10)],
        "K": [150 - i for i in range(32)],
    }


@pytest.fixture(scope="module")
def superflex_pool(superflex_points):
    return _make_pool(superflex_points)


# ------------------------------------------------------------------
# Builder fixtures – hand the synthetic-data builders to test modules
# ------------------------------------------------------------------

@pytest.fixture(scope="session")
def make_players_df():
    return _make_players_df


@pytest.fixture(scope="session")
def make_pool():
    return _make_pool


@pytest.fixture(scope="session")
def make_league():
    return _make_league
