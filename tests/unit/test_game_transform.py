"""Unit tests for the game transformer.

Covers:
- filter_final_games: Final status and season-start boundary
- transform_game: tracked side, opponent, result, pitcher line
- GameRow.to_display: "N/A" rendering
"""

from datetime import date

import pytest

from mlb_team_pitching.constants import TEAM_ABBREVIATIONS, abbreviate_team
from mlb_team_pitching.transform.games import (
    GameResult,
    GameRow,
    GameTransformer,
    Location,
    determine_result,
    find_game_log_stats,
    parse_game_datetime,
)

from tests.builders import RANGERS_ID, RAYS_ID, make_game, make_pitcher

GAME_LOG = {"inningsPitched": "6.0", "strikeOuts": 7, "baseOnBalls": 1, "earnedRuns": 2}


@pytest.fixture
def transformer():
    return GameTransformer(team_id=RAYS_ID, season_start=date(2025, 3, 28))


class TestFilterFinalGames:
    """Test filter_final_games()."""

    @pytest.mark.parametrize(
        "state",
        ["Scheduled", "Pre-Game", "In Progress", "Postponed", "Cancelled", "Completed Early"],
    )
    def test_non_final_excluded(self, transformer, state):
        """Test only detailedState == 'Final' survives."""
        assert transformer.filter_final_games([make_game(state=state)]) == []

    def test_final_kept(self, transformer):
        game = make_game()
        assert transformer.filter_final_games([game]) == [game]

    def test_spring_training_excluded(self, transformer):
        """Test games before season start are dropped."""
        games = [
            make_game(game_pk=1, game_date="2025-03-20T17:05:00Z"),
            make_game(game_pk=2, game_date="2025-03-27T23:59:59Z"),
        ]
        assert transformer.filter_final_games(games) == []

    def test_season_start_inclusive(self, transformer):
        """Test a game at the season-start instant is kept."""
        game = make_game(game_date="2025-03-28T00:00:00Z")
        assert transformer.filter_final_games([game]) == [game]

    def test_order_preserved(self, transformer):
        """Test surviving games keep input order (no re-sorting)."""
        games = [
            make_game(game_pk=3, game_date="2025-04-10T23:05:00Z"),
            make_game(game_pk=1, game_date="2025-04-01T23:05:00Z"),
            make_game(game_pk=9, game_date="2025-04-05T23:05:00Z", state="Postponed"),
            make_game(game_pk=2, game_date="2025-04-05T23:05:00Z"),
        ]

        result = transformer.filter_final_games(games)

        assert [g["gamePk"] for g in result] == [3, 1, 2]

    def test_missing_fields_excluded(self, transformer):
        """Test records without status or date are dropped, not errors."""
        no_status = make_game()
        del no_status["status"]
        no_date = make_game()
        del no_date["gameDate"]
        bad_date = make_game(game_date="not-a-date")

        assert transformer.filter_final_games([no_status, no_date, bad_date]) == []

    def test_season_start_string(self):
        """Test season start accepts an ISO string."""
        transformer = GameTransformer(team_id=RAYS_ID, season_start="2025-04-05")

        games = [
            make_game(game_pk=1, game_date="2025-04-04T23:05:00Z"),
            make_game(game_pk=2, game_date="2025-04-05T23:05:00Z"),
        ]

        assert [g["gamePk"] for g in transformer.filter_final_games(games)] == [2]


class TestTransformGame:
    """Test transform_game()."""

    def test_home_win(self, transformer):
        """Test tracked team at home 5-3 is a 'vs.' win."""
        row = transformer.transform_game(make_game(home_score=5, away_score=3))

        assert row.location == Location.HOME
        assert row.location.value == "vs."
        assert row.result == GameResult.WIN
        assert row.score == "5-3"
        assert row.opponent == "TEX"

    def test_away_loss(self, transformer):
        """Test tracked team on the road: scores are team-first."""
        game = make_game(
            home_id=RANGERS_ID,
            home_name="Texas Rangers",
            home_score=6,
            away_id=RAYS_ID,
            away_name="Tampa Bay Rays",
            away_score=2,
        )

        row = transformer.transform_game(game)

        assert row.location == Location.AWAY
        assert row.location.value == "@"
        assert row.result == GameResult.LOSS
        assert row.score == "2-6"
        assert row.opponent == "TEX"

    def test_tie(self, transformer):
        row = transformer.transform_game(make_game(home_score=4, away_score=4))

        assert row.result == GameResult.TIE
        assert row.score == "4-4"

    def test_tracked_side_pitcher_only(self, transformer):
        """Test the opponent's probable pitcher is never used."""
        game = make_game(
            home_pitcher=make_pitcher("Shane Baz", GAME_LOG),
            away_pitcher=make_pitcher("Nathan Eovaldi", {"inningsPitched": "7.0"}),
        )

        row = transformer.transform_game(game)

        assert row.pitcher == "Shane Baz"
        assert row.innings_pitched == "6.0"

    def test_pitching_line(self, transformer):
        """Test the gameLog pitching entry supplies all four stats."""
        row = transformer.transform_game(make_game(home_pitcher=make_pitcher("Shane Baz", GAME_LOG)))

        assert row.pitcher == "Shane Baz"
        assert row.innings_pitched == "6.0"
        assert row.strikeouts == 7
        assert row.base_on_balls == 1
        assert row.earned_runs == 2

    def test_game_pk_carried(self, transformer):
        assert transformer.transform_game(make_game(game_pk=778450)).game_pk == 778450

    def test_unknown_opponent_passthrough(self, transformer):
        """Test unmapped names are used verbatim."""
        game = make_game(away_name="Durham Bulls")

        assert transformer.transform_game(game).opponent == "Durham Bulls"

    def test_missing_probable_pitcher(self, transformer):
        """Test no probable pitcher → pitcher and every stat missing."""
        row = transformer.transform_game(make_game())

        assert row.pitcher is None
        assert row.innings_pitched is None
        assert row.strikeouts is None
        assert row.base_on_balls is None
        assert row.earned_runs is None

    def test_pitcher_without_game_log(self, transformer):
        """Test only season/career stat entries → every stat missing."""
        season_entry = {
            "type": {"displayName": "season"},
            "group": {"displayName": "pitching"},
            "stats": {"inningsPitched": "101.1", "strikeOuts": 99},
        }
        hitting_log = {
            "type": {"displayName": "gameLog"},
            "group": {"displayName": "hitting"},
            "stats": {"strikeOuts": 2},
        }
        pitcher = make_pitcher("Ryan Pepiot", extra_stats=[season_entry, hitting_log])

        row = transformer.transform_game(make_game(home_pitcher=pitcher))

        assert row.pitcher == "Ryan Pepiot"
        assert row.innings_pitched is None
        assert row.strikeouts is None
        assert row.base_on_balls is None
        assert row.earned_runs is None

    def test_partial_stats(self, transformer):
        """Test a missing stat field only affects that field."""
        pitcher = make_pitcher("Drew Rasmussen", {"inningsPitched": "5.1", "strikeOuts": 6})

        row = transformer.transform_game(make_game(home_pitcher=pitcher))

        assert row.innings_pitched == "5.1"
        assert row.strikeouts == 6
        assert row.base_on_balls is None
        assert row.earned_runs is None

    def test_missing_scores(self, transformer):
        """Test absent scores render as N/A and compare as a tie."""
        row = transformer.transform_game(make_game(home_score=None, away_score=None))

        assert row.result == GameResult.TIE
        assert row.score == "N/A-N/A"

    def test_neither_side_tracked(self, transformer):
        """Test a game without the tracked id treats away as tracked."""
        game = make_game(home_id=147, home_name="New York Yankees", away_id=111, away_name="Boston Red Sox")

        row = transformer.transform_game(game)

        assert row.location == Location.AWAY
        assert row.opponent == "NYY"


class TestGameDate:
    """Test MM/DD date rendering."""

    def test_two_digit_month_day(self, transformer):
        row = transformer.transform_game(make_game(game_date="2025-04-02T23:05:00Z"))

        assert row.date == "04/02"

    def test_rendered_in_display_timezone(self, transformer):
        """Test a night game after midnight UTC keeps its local date."""
        row = transformer.transform_game(make_game(game_date="2025-04-03T01:10:00Z"))

        assert row.date == "04/02"

    def test_utc_display(self):
        transformer = GameTransformer(team_id=RAYS_ID, display_timezone="UTC")

        row = transformer.transform_game(make_game(game_date="2025-04-03T01:10:00Z"))

        assert row.date == "04/03"

    def test_unparseable_date(self, transformer):
        assert transformer.format_game_date("yesterday") == "N/A"
        assert transformer.format_game_date(None) == "N/A"


class TestTransformGames:
    """Test transform_games() filter + map."""

    def test_filters_then_maps(self, transformer):
        games = [
            make_game(game_pk=1, game_date="2025-03-20T17:05:00Z"),
            make_game(game_pk=2, state="Scheduled"),
            make_game(game_pk=3),
        ]

        rows = transformer.transform_games(games)

        assert [r.game_pk for r in rows] == [3]

    def test_idempotent(self, transformer):
        """Test repeated runs over the same input give identical rows."""
        games = [make_game(game_pk=i, home_pitcher=make_pitcher("Shane Baz", GAME_LOG)) for i in range(3)]

        assert transformer.transform_games(games) == transformer.transform_games(games)


class TestGameRowDisplay:
    """Test GameRow.to_display()."""

    def test_missing_values_render_na(self):
        row = GameRow(
            game_pk=1,
            date="04/02",
            location=Location.HOME,
            opponent="TEX",
            result=GameResult.WIN,
            score="5-3",
        )

        display = row.to_display()

        assert display["pitcher"] == "N/A"
        assert display["innings_pitched"] == "N/A"
        assert display["strikeouts"] == "N/A"
        assert display["base_on_balls"] == "N/A"
        assert display["earned_runs"] == "N/A"
        assert display["location"] == "vs."
        assert display["result"] == "Win"

    def test_zero_is_not_na(self):
        """Test a real zero is kept, not treated as missing."""
        row = GameRow(
            game_pk=1,
            date="04/02",
            location=Location.AWAY,
            opponent="TEX",
            result=GameResult.LOSS,
            score="0-1",
            pitcher="Zack Littell",
            innings_pitched="7.0",
            strikeouts=0,
            base_on_balls=0,
            earned_runs=0,
        )

        display = row.to_display()

        assert display["strikeouts"] == 0
        assert display["earned_runs"] == 0
        assert display["pitcher"] == "Zack Littell"


class TestHelpers:
    """Test module-level helpers."""

    @pytest.mark.parametrize(
        "team, opponent, expected",
        [(5, 3, GameResult.WIN), (3, 5, GameResult.LOSS), (2, 2, GameResult.TIE), (None, 1, GameResult.TIE)],
    )
    def test_determine_result(self, team, opponent, expected):
        assert determine_result(team, opponent) == expected

    @pytest.mark.parametrize(
        "team, opponent, expected",
        [("5", 3, GameResult.WIN), (3, "5", GameResult.LOSS), ("2", "2", GameResult.TIE), ("x", 1, GameResult.TIE)],
    )
    def test_determine_result_numeric_strings(self, team, opponent, expected):
        """Test string scores compare as numbers and never raise."""
        assert determine_result(team, opponent) == expected

    def test_string_score_game(self, transformer):
        row = transformer.transform_game(make_game(home_score="5", away_score=3))

        assert row.result == GameResult.WIN
        assert row.score == "5-3"

    def test_find_game_log_stats_skips_malformed_entries(self):
        """Test non-mapping stat entries are passed over."""
        pitcher = make_pitcher("X", {"strikeOuts": 4})
        pitcher["stats"] = ["bogus", {"group": "pitching", "type": None}, *pitcher["stats"]]

        assert find_game_log_stats(pitcher) == {"strikeOuts": 4}

    def test_malformed_probable_pitcher(self, transformer):
        game = make_game()
        game["teams"]["home"]["probablePitcher"] = "Shane Baz"

        row = transformer.transform_game(game)

        assert row.pitcher is None
        assert row.to_display()["strikeouts"] == "N/A"

    def test_find_game_log_stats_none(self):
        assert find_game_log_stats(None) is None
        assert find_game_log_stats({"fullName": "X"}) is None

    def test_find_game_log_stats_first_match(self):
        pitcher = make_pitcher("X", {"strikeOuts": 3})
        pitcher["stats"].append({
            "type": {"displayName": "gameLog"},
            "group": {"displayName": "pitching"},
            "stats": {"strikeOuts": 9},
        })

        assert find_game_log_stats(pitcher) == {"strikeOuts": 3}

    def test_parse_game_datetime(self):
        parsed = parse_game_datetime("2025-04-02T23:05:00Z")

        assert parsed.isoformat() == "2025-04-02T23:05:00+00:00"
        assert parse_game_datetime("2025-04-02T23:05:00").tzinfo is not None
        assert parse_game_datetime("") is None

    def test_abbreviations(self):
        """Test the lookup table covers all 30 franchises."""
        assert len(TEAM_ABBREVIATIONS) == 30
        assert abbreviate_team("Athletics") == "ATH"
        assert abbreviate_team("Tampa Bay Rays") == "TB"
        assert abbreviate_team("Unknown Club") == "Unknown Club"
