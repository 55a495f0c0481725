# events/overlap.py
"""
Overlap classification for the availability grid.

For every (day, hour) cell we compare the viewer's own selection with
the set of *other* teams that have at least one member available:

    selected | other teams present | classification
    ---------+---------------------+---------------
      no     |        none         | EMPTY
      yes    |        none         | SELF_ONLY
      yes    |        >= 1         | FULL_MATCH
      no     |        >= 1         | OTHER_ONLY

Presence is per team, not per user: three members of one team marking
the same hour still count as one team.

Everything here is pure. The slot list is indexed by cell once per
pass, so a full grid costs O(slots + cells) and can be recomputed on
every drag step.
"""
from collections import defaultdict
from typing import Dict, FrozenSet, Iterable, List, Tuple

from .availability_matrix import DAYS_IN_WEEK, HOURS_IN_DAY, validate_matrix

EMPTY = "empty"
SELF_ONLY = "self_only"
FULL_MATCH = "full_match"
OTHER_ONLY = "other_only"

CLASSIFICATIONS = (EMPTY, SELF_ONLY, FULL_MATCH, OTHER_ONLY)

Cell = Tuple[int, int]


def _slot_fields(slot):
    if isinstance(slot, dict):
        return slot["day_index"], slot["hour_index"], slot["team_id"]
    return slot.day_index, slot.hour_index, slot.team_id


def index_presence(slots: Iterable, exclude_team_id=None) -> Dict[Cell, FrozenSet]:
    """
    Map each cell to the distinct team ids available there, leaving out
    `exclude_team_id` (the viewer's team). Cells nobody marked are absent.

    Slots may be model instances or dicts with day_index, hour_index
    and team_id.
    """
    presence = defaultdict(set)
    for slot in slots:
        day, hour, team_id = _slot_fields(slot)
        if team_id == exclude_team_id:
            continue
        presence[(day, hour)].add(team_id)
    return {cell: frozenset(teams) for cell, teams in presence.items()}


def classify_cell(is_self_selected: bool, present_teams) -> str:
    if is_self_selected:
        return FULL_MATCH if present_teams else SELF_ONLY
    return OTHER_ONLY if present_teams else EMPTY


def classify_grid(slots: Iterable, viewer_team_id, matrix) -> List[List[dict]]:
    """
    Classify every cell of the week for a viewer.

    Args:
        slots: every availability slot of the event (all users, all teams)
        viewer_team_id: the team the viewer is marking availability for
        matrix: the viewer's current 7x24 selection (possibly unsaved)

    Returns:
        7 rows of 24 dicts:
        {"day_index", "hour_index", "selected", "classification", "present_teams"}
        where present_teams is a sorted list of the other teams' ids.
    """
    validate_matrix(matrix)
    presence = index_presence(slots, exclude_team_id=viewer_team_id)
    no_teams = frozenset()

    grid = []
    for day in range(DAYS_IN_WEEK):
        row = []
        for hour in range(HOURS_IN_DAY):
            present = presence.get((day, hour), no_teams)
            selected = matrix[day][hour]
            row.append({
                "day_index": day,
                "hour_index": hour,
                "selected": selected,
                "classification": classify_cell(selected, present),
                "present_teams": sorted(present),
            })
        grid.append(row)
    return grid


def summarize(grid: List[List[dict]]) -> dict:
    """
    Count cells per classification and list the FULL_MATCH cells
    (the candidate meeting times), day-major.
    """
    counts = {classification: 0 for classification in CLASSIFICATIONS}
    best_slots = []
    for row in grid:
        for cell in row:
            counts[cell["classification"]] += 1
            if cell["classification"] == FULL_MATCH:
                best_slots.append({
                    "day_index": cell["day_index"],
                    "hour_index": cell["hour_index"],
                })
    return {
        "counts": counts,
        "best_slots": best_slots,
    }
