"""Tests for src.data_pipeline.run_valuation (full pipeline integration)."""

import json

import pytest

from src.data_pipeline.run_valuation import _build_parser, run_valuation
from src.valuation.player_pool import ConfigurationError

_REQUIRED_PLAYER_KEYS = {"source_row", "rank", "name", "team", "position", "fpts", "vor", "vols"}

_LEAGUE = {
    "num_teams": 2,
    "positions": {
        "QB": {"starters": 1, "bench": 1},
        "RB": {"starters": 1, "bench": 1},
        "WR": {"starters": 1, "bench": 1},
        "TE": {"starters": 1, "bench": 0},
        "FLEX": {"starters": 1},
        "SF": {"starters": 1},
        "DST": {"starters": 1, "bench": 0},
        "K": {"starters": 1, "bench": 0},
    },
}

_PLAYERS_CSV = """\
RK,PLAYER NAME,TEAM,POS,FPTS
1,QB A,BUF,QB1,"400.0"
2,QB B,BAL,QB2,380
3,RB A,ATL,RB1,300
4,WR A,CIN,WR1,290
5,RB B,PHI,RB2,280
6,WR B,MIN,WR2,275
7,QB C,PHI,QB3,360
8,RB C,DET,RB3,270
9,WR C,LAR,WR3,265
10,RB D,NYJ,RB4,260
11,WR D,DAL,WR4,140
12,TE A,KC,TE1,200
13,TE B,DET,TE2,150
14,TE C,LV,TE3,100
15,QB D,DAL,QB4,200
16,RB E,SF,RB5,150
17,Denver Broncos,,DST1,110
18,Buffalo Bills,,DST2,105
19,K A,BAL,K1,140
20,K B,DET,K2,130
21,Mystery Man,FA,LB1,50
"""


@pytest.fixture(scope="module")
def inputs(tmp_path_factory):
    """Write a small but complete set of input files."""
    data_dir = tmp_path_factory.mktemp("raw")
    players = data_dir / "players.csv"
    players.write_text(_PLAYERS_CSV, encoding="utf-8")
    league = data_dir / "league.json"
    league.write_text(json.dumps(_LEAGUE), encoding="utf-8")
    drafted = data_dir / "drafted.csv"
    drafted.write_text("Player\nqb a\nRB A\n", encoding="utf-8")
    return players, league, drafted


# ── Valuation only ────────────────────────────────────────────────────


class TestRunValuation:
    """End-to-end run without a VONA target."""

    @pytest.fixture(scope="class")
    def output(self, inputs, tmp_path_factory):
        players, league, _ = inputs
        out_dir = tmp_path_factory.mktemp("processed")
        output_path = run_valuation(players, league, output_dir=out_dir)
        with open(output_path) as f:
            data = json.load(f)
        return data, output_path, out_dir

    def test_produces_file(self, output):
        _, output_path, _ = output
        assert output_path.exists()
        assert output_path.name == "values_players.json"

    def test_latest_symlink_created(self, output):
        _, _, out_dir = output
        assert (out_dir / "values_latest.json").is_symlink()

    def test_metadata(self, output):
        data, _, _ = output
        meta = data["metadata"]
        assert meta["league_size"] == 2
        assert meta["total_players"] == 20   # LB row dropped
        assert meta["drafted_players"] == 0

    def test_player_structure(self, output):
        data, _, _ = output
        assert len(data["players"]) == 21
        for player in data["players"]:
            assert set(player) == _REQUIRED_PLAYER_KEYS

    def test_values_written_back_by_row(self, output):
        data, _, _ = output
        by_name = {p["name"]: p for p in data["players"]}

        # QB: 3 starters + 2 bench runs past the pool, so QB D (200) is the baseline
        assert by_name["QB A"]["source_row"] == 0
        assert by_name["QB A"]["vor"] == 200.0
        assert by_name["QB A"]["vor"] is not None
        assert by_name["QB A"]["vor"] > by_name["QB B"]["vor"]
        assert by_name["Mystery Man"]["vor"] is None
        assert by_name["Denver Broncos"]["team"] == "DEN"

    def test_allocation_report(self, output):
        data, _, _ = output
        allocation = {row["Position"]: row for row in data["allocation"]}

        assert set(allocation) == {"QB", "RB", "WR", "TE", "DST", "K"}
        # SF takes the best two left after direct starters: QB C 360, RB C 270
        assert allocation["QB"]["SF"] == 1
        assert allocation["RB"]["SF"] == 1
        assert allocation["QB"]["Total"] == 3
        # Flex then sees RB D 260 and WR C 265
        assert allocation["RB"]["Flex"] == 1
        assert allocation["WR"]["Flex"] == 1
        assert allocation["RB"]["Total"] == 4

    def test_no_vona_section(self, output):
        data, _, _ = output
        assert "vona" not in data


# ── With live draft + VONA ────────────────────────────────────────────


class TestRunValuationWithVONA:
    @pytest.fixture(scope="class")
    def output(self, inputs, tmp_path_factory):
        players, league, drafted = inputs
        out_dir = tmp_path_factory.mktemp("processed_vona")
        output_path = run_valuation(
            players, league, drafted_file=drafted, target_pick=6, output_dir=out_dir,
        )
        with open(output_path) as f:
            return json.load(f)

    def test_vona_section(self, output):
        vona = output["vona"]
        assert vona["target_pick"] == 6
        assert vona["picks_until_target"] == 3     # 2 picks made
        assert vona["draft_round"] == 2            # pick 3 in a 2-team league

    def test_drafted_players_not_on_board(self, output):
        board_names = {row["Player"] for row in output["vona"]["board"]}
        assert "QB A" not in board_names
        assert "RB A" not in board_names
        assert len(board_names) == 18

    def test_position_report(self, output):
        positions = {row["Position"]: row for row in output["vona"]["positions"]}
        assert positions["QB"]["Current_Best"] == "QB B"
        assert positions["RB"]["Players_Remaining"] == 4

    def test_insights_present(self, output):
        assert output["vona"]["insights"]
        assert output["metadata"]["drafted_players"] == 2

    def test_valuation_ignores_drafted_players(self, output):
        """VOR/VOLS are computed on the full pool, drafted or not."""
        by_name = {p["name"]: p for p in output["players"]}
        assert by_name["QB A"]["vor"] is not None


# ── Errors and CLI ────────────────────────────────────────────────────


class TestRunValuationErrors:
    def test_missing_points_column(self, tmp_path, inputs):
        _, league, _ = inputs
        players = tmp_path / "bad.csv"
        players.write_text("Player,Position\nA,QB\n", encoding="utf-8")
        with pytest.raises(ConfigurationError):
            run_valuation(players, league, output_dir=tmp_path)
        assert not (tmp_path / "values_bad.json").exists()

    def test_missing_players_file(self, tmp_path, inputs):
        _, league, _ = inputs
        with pytest.raises(FileNotFoundError):
            run_valuation(tmp_path / "missing.csv", league, output_dir=tmp_path)


class TestParser:
    def test_defaults(self):
        args = _build_parser().parse_args(["players.csv", "league.json"])
        assert args.drafted is None
        assert args.target_pick is None
        assert args.log_level == "INFO"

    def test_vona_options(self):
        args = _build_parser().parse_args([
            "players.csv", "league.json", "--drafted", "d.csv", "--target-pick", "30",
        ])
        assert args.target_pick == 30
        assert args.drafted.name == "d.csv"


class TestDraftedNameMatching:
    """Drafted names are cleaned the same way as projection names."""

    def test_drafted_names_with_curly_quotes_and_spacing_leave_the_board(self, tmp_path):
        players = tmp_path / "players.csv"
        players.write_text(
            "Player,Position,FPTS\n"
            "Ja’Marr Chase,WR,320\n"
            "Other  Guy,WR,300\n"
            "Third,WR,250\n",
            encoding="utf-8",
        )
        league = tmp_path / "league.json"
        league.write_text(json.dumps({
            "num_teams": 1,
            "positions": {"WR": {"starters": 1, "bench": 0}},
        }), encoding="utf-8")
        drafted = tmp_path / "drafted.csv"
        drafted.write_text("Player\nJa’Marr Chase\nOther  Guy\n", encoding="utf-8")

        output_path = run_valuation(
            players, league, drafted_file=drafted, target_pick=3, output_dir=tmp_path,
        )
        with open(output_path) as f:
            data = json.load(f)

        assert [row["Player"] for row in data["vona"]["board"]] == ["Third"]
        assert data["metadata"]["drafted_players"] == 2
