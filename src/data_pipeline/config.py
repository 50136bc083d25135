from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Data directories
DATA_DIR = PROJECT_ROOT / "data"
RAW_DATA_DIR = DATA_DIR / "raw"
PROCESSED_DATA_DIR = DATA_DIR / "processed"

# Canonical player columns consumed by the valuation engine
PLAYER_COLUMNS = ["Rank", "Player", "Team", "Position", "FPTS", "Source_Row"]

# Header variants seen in projection exports -> canonical column
PLAYER_COLUMN_ALIASES = {
    "RK": "Rank",
    "RANK": "Rank",
    "PLAYER": "Player",
    "PLAYER NAME": "Player",
    "NAME": "Player",
    "TEAM": "Team",
    "TM": "Team",
    "POS": "Position",
    "POSITION": "Position",
    "FPTS": "FPTS",
    "POINTS": "FPTS",
    "PROJ": "FPTS",
    "PROJECTION": "FPTS",
}

# Columns the ingester refuses to proceed without
REQUIRED_PLAYER_COLUMNS = ("Player", "Position", "FPTS")

# Output file names (use .format(name=...))
OUTPUT_FILE_PATTERN = "values_{name}.json"
LATEST_OUTPUT_FILE = "values_latest.json"
