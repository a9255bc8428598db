"""Static MLB lookup tables and defaults."""

from types import MappingProxyType

MLB_API_BASE_URL = "https://statsapi.mlb.com/api/v1"
MLB_SPORT_ID = 1

TAMPA_BAY_RAYS_ID = 139
SEASON_START_DATE = "2025-03-28"

# Sentinel rendered wherever a pitcher or stat is missing
NOT_AVAILABLE = "N/A"

# Full team name -> short code. The A's are listed as just "Athletics" in 2025.
TEAM_ABBREVIATIONS = MappingProxyType({
    "Arizona Diamondbacks": "ARI",
    "Atlanta Braves": "ATL",
    "Baltimore Orioles": "BAL",
    "Boston Red Sox": "BOS",
    "Chicago White Sox": "CWS",
    "Chicago Cubs": "CHC",
    "Cincinnati Reds": "CIN",
    "Cleveland Guardians": "CLE",
    "Colorado Rockies": "COL",
    "Detroit Tigers": "DET",
    "Houston Astros": "HOU",
    "Kansas City Royals": "KC",
    "Los Angeles Angels": "LAA",
    "Los Angeles Dodgers": "LAD",
    "Miami Marlins": "MIA",
    "Milwaukee Brewers": "MIL",
    "Minnesota Twins": "MIN",
    "New York Yankees": "NYY",
    "New York Mets": "NYM",
    "Athletics": "ATH",
    "Philadelphia Phillies": "PHI",
    "Pittsburgh Pirates": "PIT",
    "San Diego Padres": "SD",
    "San Francisco Giants": "SF",
    "Seattle Mariners": "SEA",
    "St. Louis Cardinals": "STL",
    "Tampa Bay Rays": "TB",
    "Texas Rangers": "TEX",
    "Toronto Blue Jays": "TOR",
    "Washington Nationals": "WSH",
})


def abbreviate_team(name: str) -> str:
    """Return the short code for a team name, or the name itself if unmapped."""
    return TEAM_ABBREVIATIONS.get(name, name)
