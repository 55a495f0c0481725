# ux/services/scheduling.py

from events.availability_matrix import DAY_LABELS, HOUR_LABELS, matrix_from_slots
from events.overlap import classify_grid, summarize
from events.sanitizers import ValidationError
from events.services import AvailabilityService


def resolve_viewer_team(event, user, team_id=None):
    """
    The team the viewer is marking availability for.

    Explicit team_id wins; otherwise the team of the viewer's saved slots.
    """
    if team_id is None:
        saved = (
            AvailabilityService.slots_for_event(event, user=user)
            .values_list("team_id", flat=True)
            .first()
        )
        if saved is None:
            raise ValidationError("Select a team to view availability")
        team_id = saved

    if not event.has_team(team_id):
        raise ValidationError("Invalid team for this event")

    return event.team_a if event.team_a_id == team_id else event.team_b


def build_event_grid(event, user, team, matrix=None):
    """
    Classified 7x24 grid of `event` as seen by `user` playing for `team`.

    `matrix` is the viewer's in-progress selection; when omitted, the
    viewer's slots saved for `team` are used. Slots the viewer saved
    under the other team stay out of the selection and count as that
    team's presence like anyone else's.
    """
    slots = list(
        AvailabilityService.slots_for_event(event)
        .values("day_index", "hour_index", "team_id", "user_id")
    )

    if matrix is None:
        matrix = matrix_from_slots(
            s for s in slots
            if s["user_id"] == user.id and s["team_id"] == team.id
        )

    grid = classify_grid(slots, team.id, matrix)

    return {
        "event": {
            "id": event.id,
            "name": event.name,
            "start_date": event.start_date,
            "end_date": event.end_date,
        },
        "team": {
            "id": team.id,
            "name": team.name,
            "color": team.color,
        },
        "days": DAY_LABELS,
        "hours": HOUR_LABELS,
        "cells": grid,
        "summary": summarize(grid),
    }
