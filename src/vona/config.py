# Share of all picks expected to go to each position before round adjustment
BASE_DRAFT_RATES = {
    "QB": 0.12,
    "RB": 0.28,
    "WR": 0.30,
    "TE": 0.12,
    "DST": 0.09,
    "K": 0.09,
}

# Round breakpoints: rounds 1-3 are "early", 4-8 "middle", 9+ "late"
EARLY_ROUND_MAX = 3
MIDDLE_ROUND_MAX = 8

# Multipliers applied to the base rate in each draft phase
ROUND_RATE_MULTIPLIERS = {
    "early": {"RB": 1.3, "WR": 1.3, "DST": 0.1, "K": 0.1},
    "middle": {"QB": 1.3, "TE": 1.3},
    "late": {"DST": 2.5, "K": 2.5},
}

# Upper bound on any position's draft rate
MAX_DRAFT_RATE = 1.0

# Players averaged either side of the expected index
EXPECTED_VALUE_WINDOW = 1

# Scarcity index: top tier vs. next tier, damped by pool depth
SCARCITY_TOP_COUNT = 3
SCARCITY_NEXT_COUNT = 5
SCARCITY_DEPTH_DAMPING = 10

# Tier-break classification: % drop from top-3 average to next-3 average
TIER_BREAK_NEXT_COUNT = 3
TIER_BREAK_THRESHOLDS = (
    (15.0, "Major"),
    (8.0, "Moderate"),
)
TIER_BREAK_DEFAULT = "Gradual"

# Recommendation by gap between best available and expected value at pick
RECOMMENDATION_THRESHOLDS = (
    (20.0, "Priority"),
    (10.0, "Consider"),
    (5.0, "Can wait"),
)
RECOMMENDATION_DEFAULT = "Safe to wait"
NO_PLAYERS_RECOMMENDATION = "No players available"

# Number of entries named in the insight strings
INSIGHT_TOP_PLAYERS = 3
INSIGHT_SCARCE_POSITIONS = 2
