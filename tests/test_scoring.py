from datetime import datetime, timezone

import pytest

from models import GamePlayer, PlayerAggregate, ScoreEntry, ScoreType
from scoring.leaderboard import build_results, competition_positions, live_leaderboard, winners
from scoring.scorecard import aggregate, aggregate_game, score_type_counts, score_types, standard_par_table

CREATED = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


def _entries(player_id, strokes_by_hole, par_table=None):
    """Build entries for holes 1..N; strokes_by_hole maps hole -> strokes (missing = None)."""
    par_table = par_table or standard_par_table(18)
    return [
        ScoreEntry(
            game_id="g1",
            player_id=player_id,
            hole=h.number,
            strokes=strokes_by_hole.get(h.number),
            par=h.par,
        )
        for h in par_table
    ]


def _agg(player_id, total, holes_played=18, total_par=72):
    return PlayerAggregate(
        player_id=player_id, front9_total=total, total=total,
        holes_played=holes_played, total_par=total_par,
    )


# ================================================================
# Scorecard aggregation
# ================================================================

def test_standard_par_table():
    table = standard_par_table(18)
    assert len(table) == 18
    assert sum(h.par for h in table) == 72
    assert sum(h.par for h in table[:9]) == 36
    assert [h.par for h in standard_par_table(9)] == [h.par for h in table[:9]]

    with pytest.raises(ValueError):
        standard_par_table(12)


def test_aggregate_full_round_sum_invariant():
    pars = standard_par_table(18)
    strokes = {h.number: h.par + (1 if h.number % 3 == 0 else 0) for h in pars}
    agg = aggregate("p1", _entries("p1", strokes), pars)

    assert agg.front9_total == 39
    assert agg.back9_total == 39
    assert agg.front9_total + agg.back9_total == agg.total == 78
    assert agg.holes_played == 18
    assert agg.total_par == 72


def test_aggregate_front_nine_only():
    """Holes 1-9 entered (40 strokes), back nine untouched."""
    strokes = {1: 5, 2: 4, 3: 4, 4: 5, 5: 4, 6: 5, 7: 3, 8: 5, 9: 5}
    agg = aggregate("p1", _entries("p1", strokes), standard_par_table(18))

    assert agg.front9_total == 40
    assert agg.back9_total == 0
    assert agg.total == 40
    assert agg.holes_played == 9
    assert agg.total_par == 36
    assert agg.per_hole_diff[9:] == [None] * 9


def test_aggregate_eagle_on_par_three():
    agg = aggregate("p1", _entries("p1", {3: 1}), standard_par_table(18))
    assert agg.diff_for_hole(3) == -2
    assert score_types(agg)[2] == ScoreType.EAGLE
    assert agg.total_par == 3


def test_aggregate_no_entries():
    agg = aggregate("p1", [], standard_par_table(18))
    assert agg.total == 0
    assert agg.holes_played == 0
    assert agg.total_par == 0
    assert agg.per_hole_diff == [None] * 18


def test_aggregate_nine_hole_game_has_no_back_nine():
    pars = standard_par_table(9)
    agg = aggregate("p1", _entries("p1", {i: 4 for i in range(1, 10)}, pars), pars)
    assert agg.back9_total == 0
    assert agg.total == agg.front9_total == 36
    assert len(agg.per_hole_diff) == 9


def test_aggregate_par_table_wins_over_entry_par():
    pars = standard_par_table(18)
    stale = [ScoreEntry(game_id="g1", player_id="p1", hole=3, strokes=3, par=4)]
    agg = aggregate("p1", stale, pars)
    assert agg.diff_for_hole(3) == 0   # hole 3 is a par 3


def test_aggregate_accepts_malformed_strokes():
    agg = aggregate("p1", _entries("p1", {1: 0, 2: 25}), standard_par_table(18))
    assert agg.total == 25
    assert agg.holes_played == 2


def test_aggregate_is_deterministic():
    entries = _entries("p1", {1: 4, 5: 6, 12: 3})
    pars = standard_par_table(18)
    assert aggregate("p1", entries, pars) == aggregate("p1", entries, pars)


def test_aggregate_game_groups_by_player():
    pars = standard_par_table(18)
    entries = _entries("a", {1: 5}) + _entries("b", {1: 3, 2: 3})
    aggs = aggregate_game(["a", "b", "c"], entries, pars)
    assert aggs["a"].total == 5
    assert aggs["b"].total == 6
    assert aggs["c"].holes_played == 0


def test_score_type_counts():
    # hole 1 par 4: 3 birdie; hole 2 par 4: 4 par; hole 3 par 3: 6 double; hole 4 par 5: 3 eagle
    agg = aggregate("p1", _entries("p1", {1: 3, 2: 4, 3: 6, 4: 3}), standard_par_table(18))
    counts = score_type_counts(agg)
    assert counts == {"eagle": 1, "birdie": 1, "par": 1, "bogey": 0, "double_bogey": 1}


# ================================================================
# Live leaderboard
# ================================================================

def test_live_leaderboard_net_score_and_order():
    players = [
        GamePlayer(player_id="a", name="Ann", handicap=10),
        GamePlayer(player_id="b", name="Bob", handicap=2),
    ]
    rows = live_leaderboard(players, [_agg("a", 85), _agg("b", 80)])

    assert [r.player_id for r in rows] == ["a", "b"]
    assert rows[0].net_score == 75
    assert rows[1].net_score == 78
    assert [r.rank for r in rows] == [1, 2]


def test_live_leaderboard_excludes_players_without_strokes():
    players = [
        GamePlayer(player_id="a", name="Ann", handicap=5),
        GamePlayer(player_id="b", name="Bob", handicap=20),
    ]
    rows = live_leaderboard(players, [_agg("a", 40, holes_played=9)])
    assert [r.player_id for r in rows] == ["a"]
    assert rows[0].net_score == 35
    assert rows[0].holes_played == 9


def test_live_leaderboard_ties_keep_roster_order():
    players = [GamePlayer(player_id=pid, name=pid) for pid in ("c", "a", "b")]
    rows = live_leaderboard(players, {pid: _agg(pid, 72) for pid in ("a", "b", "c")})
    assert [r.player_id for r in rows] == ["c", "a", "b"]
    assert [r.rank for r in rows] == [1, 2, 3]


def test_live_leaderboard_is_deterministic():
    players = [GamePlayer(player_id=pid, name=pid, handicap=i) for i, pid in enumerate("abcd")]
    aggs = [_agg(pid, 70 + i) for i, pid in enumerate("dcba")]
    assert live_leaderboard(players, aggs) == live_leaderboard(players, aggs)


# ================================================================
# Final ranking
# ================================================================

@pytest.mark.parametrize("values,expected", [
    ([], []),
    ([70], [1]),
    ([70, 70, 72], [1, 1, 3]),
    ([68, 70, 70, 70, 75], [1, 2, 2, 2, 5]),
    ([60, 61, 62], [1, 2, 3]),
])
def test_competition_positions(values, expected):
    assert competition_positions(values) == expected


def test_build_results_tied_winners():
    players = [
        GamePlayer(player_id="a", name="A", handicap=10),
        GamePlayer(player_id="b", name="B", handicap=5),
        GamePlayer(player_id="c", name="C", handicap=0),
    ]
    aggs = [_agg("a", 80), _agg("b", 75), _agg("c", 72)]
    results = build_results("g1", players, aggs, CREATED)

    by_player = {r.player_id: r for r in results}
    assert by_player["a"].net_score == 70
    assert by_player["b"].net_score == 70
    assert by_player["a"].position == by_player["b"].position == 1
    assert by_player["c"].position == 3
    assert by_player["a"].is_winner and by_player["b"].is_winner
    assert not by_player["c"].is_winner
    assert {r.player_id for r in winners(results)} == {"a", "b"}


def test_build_results_includes_players_without_strokes():
    players = [
        GamePlayer(player_id="a", name="A", handicap=10),
        GamePlayer(player_id="b", name="B", handicap=4),
    ]
    results = build_results("g1", players, [_agg("a", 85)], CREATED)

    zero = next(r for r in results if r.player_id == "b")
    assert zero.total_strokes == 0
    assert zero.holes_played == 0
    assert zero.total_par == 0
    assert zero.net_score == -4
    # Zero strokes ranks on -handicap, which beats a played round here
    assert zero.position == 1
    assert len(results) == 2


def test_build_results_ranking_monotonic_and_winner_set():
    players = [GamePlayer(player_id=str(i), name=str(i), handicap=i % 4) for i in range(8)]
    aggs = [_agg(str(i), 70 + (i * 7) % 5) for i in range(8)]
    results = build_results("g1", players, aggs, CREATED)

    for a in results:
        for b in results:
            if a.net_score < b.net_score:
                assert a.position <= b.position
    assert {r.player_id for r in results if r.is_winner} == {r.player_id for r in results if r.position == 1}
    assert any(r.is_winner for r in results)
    assert all(r.created_at == CREATED for r in results)


def test_build_results_handicap_ten_over_par_72():
    players = [GamePlayer(player_id="a", name="A", handicap=10)]
    result = build_results("g1", players, [_agg("a", 85)], CREATED)[0]
    assert result.net_score == 75
    assert result.total_par == 72
    assert result.position == 1
    assert result.is_winner
