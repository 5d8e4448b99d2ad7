"""Per-player scorecard aggregation.

Turns a sparse set of per-hole stroke entries into front/back/overall totals
and stroke-to-par differentials. Pure functions, no validation: whatever
strokes are stored get summed as given.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from models import Hole, PlayerAggregate, ScoreEntry, ScoreType, classify_to_par

STANDARD_PARS = [4, 4, 3, 5, 4, 4, 3, 4, 5, 4, 3, 4, 5, 4, 4, 3, 5, 4]


def standard_par_table(number_of_holes: int = 18) -> List[Hole]:
    """Default par table: the standard par-72 layout, or its front nine."""
    if number_of_holes not in (9, 18):
        raise ValueError(f"number_of_holes must be 9 or 18, got {number_of_holes}")
    return [
        Hole(number=i, par=par)
        for i, par in enumerate(STANDARD_PARS[:number_of_holes], start=1)
    ]


def _strokes_by_hole(entries: Iterable[ScoreEntry]) -> Dict[int, ScoreEntry]:
    # Last entry wins if the store ever hands back duplicates for a hole.
    return {entry.hole: entry for entry in entries}


def aggregate(
    player_id: str,
    entries: Iterable[ScoreEntry],
    par_table: Sequence[Hole],
) -> PlayerAggregate:
    """Compute a player's totals from their entries and the game's par table.

    Holes without an entry, or with ``strokes=None``, contribute nothing to
    totals or to ``total_par``.
    """
    by_hole = _strokes_by_hole(entries)

    front = back = total_par = holes_played = 0
    per_hole_diff: List[Optional[int]] = []

    for hole in par_table:
        entry = by_hole.get(hole.number)
        strokes = entry.strokes if entry is not None else None
        if strokes is None:
            per_hole_diff.append(None)
            continue

        holes_played += 1
        total_par += hole.par
        per_hole_diff.append(strokes - hole.par)
        if hole.number <= 9:
            front += strokes
        else:
            back += strokes

    return PlayerAggregate(
        player_id=player_id,
        front9_total=front,
        back9_total=back,
        total=front + back,
        holes_played=holes_played,
        total_par=total_par,
        per_hole_diff=per_hole_diff,
    )


def aggregate_game(
    player_ids: Iterable[str],
    entries: Iterable[ScoreEntry],
    par_table: Sequence[Hole],
) -> Dict[str, PlayerAggregate]:
    """Aggregate every listed player from a game's full entry set."""
    grouped: Dict[str, List[ScoreEntry]] = {}
    for entry in entries:
        grouped.setdefault(entry.player_id, []).append(entry)
    return {
        pid: aggregate(pid, grouped.get(pid, []), par_table)
        for pid in player_ids
    }


def score_types(agg: PlayerAggregate) -> List[Optional[ScoreType]]:
    """Score type per hole, None for unplayed holes."""
    return [classify_to_par(diff) for diff in agg.per_hole_diff]


def score_type_counts(agg: PlayerAggregate) -> Dict[str, int]:
    """How many eagles, birdies, pars, bogeys and doubles a player has made."""
    counts = {score_type.value: 0 for score_type in ScoreType}
    for score_type in score_types(agg):
        if score_type is not None:
            counts[score_type.value] += 1
    return counts
