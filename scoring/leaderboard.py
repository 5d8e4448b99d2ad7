"""Cross-player ranking: live leaderboard and final results."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, List, Mapping, Sequence, Union

from models import GamePlayer, GameResult, LeaderboardRow, PlayerAggregate

Aggregates = Union[Mapping[str, PlayerAggregate], Iterable[PlayerAggregate]]


def _aggregate_for(player: GamePlayer, aggregates: Mapping[str, PlayerAggregate]) -> PlayerAggregate:
    return aggregates.get(player.player_id) or PlayerAggregate(player_id=player.player_id)


def _index(aggregates: Aggregates) -> Dict[str, PlayerAggregate]:
    if isinstance(aggregates, Mapping):
        return dict(aggregates)
    return {agg.player_id: agg for agg in aggregates}


def net_score(agg: PlayerAggregate, handicap: int) -> int:
    return agg.total - handicap


def live_leaderboard(
    players: Sequence[GamePlayer],
    aggregates: Aggregates,
) -> List[LeaderboardRow]:
    """Rank players with at least one stroke by net score.

    Players whose total is 0 are unranked and left out. Ties keep roster
    order; ranks are plain 1-based sort positions.
    """
    by_player = _index(aggregates)
    scored = []
    for player in players:
        agg = _aggregate_for(player, by_player)
        if agg.total == 0:
            continue
        scored.append((player, agg, net_score(agg, player.handicap)))

    scored.sort(key=lambda item: item[2])

    return [
        LeaderboardRow(
            player_id=player.player_id,
            name=player.name,
            handicap=player.handicap,
            total_strokes=agg.total,
            net_score=net,
            holes_played=agg.holes_played,
            rank=rank,
        )
        for rank, (player, agg, net) in enumerate(scored, start=1)
    ]


def competition_positions(sorted_values: Sequence[int]) -> List[int]:
    """Competition ranking ("1224") for values already sorted ascending.

    Equal values share a position; the next distinct value is placed after
    everyone ranked above it, e.g. [70, 70, 72, 75] -> [1, 1, 3, 4].
    """
    positions: List[int] = []
    for index, value in enumerate(sorted_values):
        if index and value == sorted_values[index - 1]:
            positions.append(positions[-1])
        else:
            positions.append(index + 1)
    return positions


def build_results(
    game_id: str,
    players: Sequence[GamePlayer],
    aggregates: Aggregates,
    created_at: datetime,
) -> List[GameResult]:
    """Final standings for every roster player, sorted by position.

    Players with no strokes are included with ``net_score = -handicap``.
    Positions are assigned over the whole sorted set, then every row at
    position 1 is marked as a winner.
    """
    by_player = _index(aggregates)
    rows = []
    for player in players:
        agg = _aggregate_for(player, by_player)
        rows.append((player, agg, net_score(agg, player.handicap)))

    rows.sort(key=lambda item: item[2])
    positions = competition_positions([net for _, _, net in rows])

    return [
        GameResult(
            game_id=game_id,
            player_id=player.player_id,
            total_strokes=agg.total,
            total_par=agg.total_par,
            holes_played=agg.holes_played,
            net_score=net,
            handicap=player.handicap,
            position=position,
            is_winner=position == 1,
            created_at=created_at,
        )
        for (player, agg, net), position in zip(rows, positions)
    ]


def winners(results: Sequence[GameResult]) -> List[GameResult]:
    return [r for r in results if r.is_winner]
