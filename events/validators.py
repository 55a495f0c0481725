# events/validators.py
"""
Event duration and team-pair rules.

On the API, EventSerializer.validate is the server-side authority: it
runs both rules against the merged values of every create and update.
Event.clean applies the same rules to admin form writes. The database
only backs up team distinctness (event_distinct_teams constraint).
"""
from datetime import date
from typing import Iterable, Tuple

from .datetime_utils import EVENT_SPAN_DAYS, days_between
from .sanitizers import ValidationError

DURATION_ERROR = (
    "Event duration must be exactly one week (7 days). "
    "End date must be 6 days after start date."
)
SAME_TEAM_ERROR = "Team A and Team B must be different"
MISSING_TEAM_ERROR = "One or both selected teams do not exist"


def validate_week_span(start_date: date, end_date: date) -> Tuple[date, date]:
    """
    end_date must be start_date + 6 days (an inclusive 7-day span).

    2024-01-01 .. 2024-01-07 passes; 2024-01-06 and 2024-01-08 fail.
    """
    if start_date is None or end_date is None:
        raise ValidationError("Both start_date and end_date are required")

    if days_between(start_date, end_date) != EVENT_SPAN_DAYS - 1:
        raise ValidationError(DURATION_ERROR)

    return start_date, end_date


def validate_team_pair(team_a_id, team_b_id, known_team_ids: Iterable) -> Tuple:
    """
    team_a_id and team_b_id must differ and both be present in
    known_team_ids (the ids that exist in the registry).
    """
    if team_a_id is None or team_b_id is None:
        raise ValidationError("Both team_a_id and team_b_id are required")

    if team_a_id == team_b_id:
        raise ValidationError(SAME_TEAM_ERROR)

    known = set(known_team_ids)
    if team_a_id not in known or team_b_id not in known:
        raise ValidationError(MISSING_TEAM_ERROR)

    return team_a_id, team_b_id
