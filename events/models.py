# events/models.py
from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MaxValueValidator
from django.db import models
from django.db.models import F, Q

from .availability_matrix import DAYS_IN_WEEK, HOURS_IN_DAY


class Team(models.Model):
    """
    A team that can be paired into events.

    Teams are seeded (manage.py seed_data) or created in the admin;
    the API exposes them read-only.
    """
    name = models.CharField(max_length=100, unique=True)
    color = models.CharField(max_length=7, default="#990000", help_text="Hex display color, e.g. #1d4ed8")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def clean(self):
        # Runs on admin writes; the API never writes teams
        from .sanitizers import ValidationError as SanitizationError
        from .sanitizers import sanitize_name, validate_color

        errors = {}
        try:
            self.name = sanitize_name(self.name, max_length=100)
        except SanitizationError as e:
            errors["name"] = str(e)
        try:
            self.color = validate_color(self.color)
        except SanitizationError as e:
            errors["color"] = str(e)

        if errors:
            raise ValidationError(errors)


class Event(models.Model):
    """
    A one-week scheduling window shared by exactly two teams.
    """
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")
    start_date = models.DateField()
    end_date = models.DateField()

    team_a = models.ForeignKey(
        Team,
        on_delete=models.PROTECT,
        related_name="events_as_team_a",
    )
    team_b = models.ForeignKey(
        Team,
        on_delete=models.PROTECT,
        related_name="events_as_team_b",
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="created_events",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        constraints = [
            models.CheckConstraint(
                condition=~Q(team_a=F("team_b")),
                name="event_distinct_teams",
            ),
        ]
        indexes = [
            models.Index(fields=["created_by", "created_at"], name="event_creator_created_idx"),
            models.Index(fields=["created_at"], name="event_created_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def team_ids(self):
        return {self.team_a_id, self.team_b_id}

    def has_team(self, team_id) -> bool:
        return team_id in self.team_ids

    def clean(self):
        # Admin writes; the API validates in EventSerializer
        from .sanitizers import ValidationError as SanitizationError
        from .validators import validate_week_span

        errors = {}
        if self.start_date and self.end_date:
            try:
                validate_week_span(self.start_date, self.end_date)
            except SanitizationError as e:
                errors["end_date"] = str(e)

        if self.team_a_id and self.team_a_id == self.team_b_id:
            errors["team_b"] = "Team A and Team B must be different"

        if errors:
            raise ValidationError(errors)


class AvailabilitySlot(models.Model):
    """
    One hour of one day of an event's week during which `user`,
    playing for `team`, is available.

    A user's slots for an event are always replaced as a whole
    (see events.services.AvailabilityService).
    """
    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="availability")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="availability_slots",
    )
    team = models.ForeignKey(Team, on_delete=models.CASCADE, related_name="availability_slots")

    day_index = models.PositiveSmallIntegerField(
        validators=[MaxValueValidator(DAYS_IN_WEEK - 1)],
        help_text="0 = Monday ... 6 = Sunday",
    )
    hour_index = models.PositiveSmallIntegerField(
        validators=[MaxValueValidator(HOURS_IN_DAY - 1)],
        help_text="0 ... 23, local time",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["day_index", "hour_index"]
        constraints = [
            models.UniqueConstraint(
                fields=["event", "user", "day_index", "hour_index"],
                name="availability_unique_user_cell",
            ),
            models.CheckConstraint(
                condition=Q(day_index__lte=DAYS_IN_WEEK - 1),
                name="availability_day_in_week",
            ),
            models.CheckConstraint(
                condition=Q(hour_index__lte=HOURS_IN_DAY - 1),
                name="availability_hour_in_day",
            ),
        ]
        indexes = [
            models.Index(fields=["event", "user"], name="availability_event_user_idx"),
            models.Index(fields=["event", "day_index", "hour_index"], name="availability_event_cell_idx"),
        ]

    def __str__(self):
        return f"{self.user} / {self.team} @ d{self.day_index} h{self.hour_index} ({self.event})"

    def clean(self):
        if self.event_id and self.team_id and not self.event.has_team(self.team_id):
            raise ValidationError({"team": "Invalid team for this event"})
