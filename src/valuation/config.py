# Default league size when the settings omit it or give a bad value
DEFAULT_NUM_TEAMS = 12

# Default per-team roster requirements (superflex league)
DEFAULT_POSITION_REQUIREMENTS = {
    "QB": {"starters": 1, "bench": 1},
    "RB": {"starters": 2, "bench": 2.5},
    "WR": {"starters": 2, "bench": 3},
    "TE": {"starters": 1, "bench": 1},
    "FLEX": {"starters": 1, "bench": 0},
    "SF": {"starters": 1, "bench": 0},
    "DST": {"starters": 1, "bench": 0.5},
    "K": {"starters": 1, "bench": 0.5},
}

# Decimal places kept on VOR / VOLS output
VALUE_PRECISION = 1
