"""Starting pitcher season aggregation.

Folds GameRows into one running total per starting pitcher, then derives
rate stats from the final totals:

    ERA  = ER * 9 / IP        (2 decimals)
    K/9  = K * 9 / IP         (2 decimals)
    BB/9 = BB * 9 / IP        (2 decimals)
    WHIP = (BB + H) / IP      (3 decimals)

IP is the season total rounded to one decimal, and that rounded value is the
divisor for every formula. Innings are summed as plain decimals ("6.1" adds
6.1, not 6 1/3). Game rows carry no hits, so H stays 0.

Zero innings is not special-cased: the division follows IEEE-754 and renders
as "Infinity" (or "NaN" for 0/0).
"""

import logging
import math
import re
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable

from .games import GameRow

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass
class PitcherTotals:
    """Running counting stats for one pitcher."""

    name: str
    games_started: int = 0
    innings_pitched: float = 0.0
    earned_runs: int = 0
    strikeouts: int = 0
    walks: int = 0
    hits: int = 0

    def add(self, row: GameRow) -> None:
        """Fold one start into the totals; missing values count as zero."""
        self.games_started += 1
        self.innings_pitched += parse_innings(row.innings_pitched)
        self.earned_runs += parse_count(row.earned_runs)
        self.strikeouts += parse_count(row.strikeouts)
        self.walks += parse_count(row.base_on_balls)
        # GameRow has no hits field; getattr keeps a future one working
        self.hits += parse_count(getattr(row, "hits", None))


@dataclass(frozen=True)
class PitcherSeasonStats:
    """Season line for one starting pitcher."""

    name: str
    games_started: int
    innings_pitched: float
    earned_runs: int
    strikeouts: int
    walks: int
    hits: int
    era: str
    k9: str
    bb9: str
    whip: str

    @classmethod
    def from_totals(cls, totals: PitcherTotals) -> "PitcherSeasonStats":
        """Derive rate stats from accumulated totals."""
        innings = float(round_half_up(totals.innings_pitched, 1))

        return cls(
            name=totals.name,
            games_started=totals.games_started,
            innings_pitched=innings,
            earned_runs=totals.earned_runs,
            strikeouts=totals.strikeouts,
            walks=totals.walks,
            hits=totals.hits,
            era=calculate_era(totals.earned_runs, innings),
            k9=calculate_k9(totals.strikeouts, innings),
            bb9=calculate_bb9(totals.walks, innings),
            whip=calculate_whip(totals.walks, totals.hits, innings),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def aggregate_pitchers(rows: Iterable[GameRow]) -> list[PitcherSeasonStats]:
    """Build season stats per starting pitcher.

    Args:
        rows: Game rows in schedule order

    Returns:
        One PitcherSeasonStats per pitcher, in order of first start.
        Rows without a pitcher are skipped.
    """
    totals: dict[str, PitcherTotals] = {}

    for row in rows:
        if not row.has_pitcher:
            continue

        if row.pitcher not in totals:
            totals[row.pitcher] = PitcherTotals(name=row.pitcher)
        totals[row.pitcher].add(row)

    logger.debug(f"Aggregated {len(totals)} starting pitchers")
    return [PitcherSeasonStats.from_totals(t) for t in totals.values()]


def calculate_era(earned_runs: int, innings_pitched: float) -> str:
    """ERA: (earned runs * 9) / innings pitched."""
    return format_fixed(_divide(earned_runs * 9, innings_pitched), 2)


def calculate_k9(strikeouts: int, innings_pitched: float) -> str:
    """K/9: (strikeouts * 9) / innings pitched."""
    return format_fixed(_divide(strikeouts * 9, innings_pitched), 2)


def calculate_bb9(walks: int, innings_pitched: float) -> str:
    """BB/9: (walks * 9) / innings pitched."""
    return format_fixed(_divide(walks * 9, innings_pitched), 2)


def calculate_whip(walks: int, hits: int, innings_pitched: float) -> str:
    """WHIP: (walks + hits) / innings pitched."""
    return format_fixed(_divide(walks + hits, innings_pitched), 3)


def parse_innings(value: Any) -> float:
    """Parse innings pitched as a decimal; missing or malformed → 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return 0.0
    return parsed if math.isfinite(parsed) else 0.0


def parse_count(value: Any) -> int:
    """Parse a counting stat from its leading integer; missing or malformed → 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def round_half_up(value: float, places: int) -> Decimal:
    """Round the exact binary value of ``value`` half away from zero."""
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_fixed(value: float, places: int) -> str:
    """Format to a fixed number of decimals; non-finite values keep their names."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        # -0.0 would render as "-0.00"
        value = 0.0
    return str(round_half_up(value, places))


def _divide(numerator: float, denominator: float) -> float:
    # IEEE-754 semantics instead of ZeroDivisionError
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator
