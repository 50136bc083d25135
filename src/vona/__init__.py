from src.vona.draft_rate import DraftRateModel
from src.vona.models import DraftState, PlayerVONA, PositionOutlook, VONAResult
from src.vona.vona_projector import VONAProjector

__all__ = [
    "DraftRateModel",
    "DraftState",
    "PlayerVONA",
    "PositionOutlook",
    "VONAProjector",
    "VONAResult",
]
