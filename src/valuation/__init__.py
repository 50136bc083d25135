from src.valuation.baseline_calculator import BaselineCalculator
from src.valuation.models import (
    AllocationResult,
    BaselineSet,
    LeagueConfig,
    Player,
    PlayerValuation,
    Position,
    PositionAllocation,
    PositionBaseline,
    PositionRequirement,
    SlotType,
    ValuationResult,
)
from src.valuation.player_pool import ConfigurationError, PlayerPool
from src.valuation.starter_allocator import StarterAllocator
from src.valuation.valuation_service import ValuationService

__all__ = [
    "AllocationResult",
    "BaselineCalculator",
    "BaselineSet",
    "ConfigurationError",
    "LeagueConfig",
    "Player",
    "PlayerPool",
    "PlayerValuation",
    "Position",
    "PositionAllocation",
    "PositionBaseline",
    "PositionRequirement",
    "SlotType",
    "StarterAllocator",
    "ValuationResult",
    "ValuationService",
]
