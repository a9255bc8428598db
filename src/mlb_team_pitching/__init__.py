"""MLB team schedule and starting-pitcher season stats.

Fetches one team's schedule from the MLB Stats API and derives:
- Per-game rows (opponent, result, score, starting pitcher line)
- Cumulative per-pitcher season stats (ERA, K/9, BB/9, WHIP)
"""

__version__ = "0.1.0"
