from rest_framework import serializers
from rest_framework.exceptions import NotFound

from .availability_matrix import DAYS_IN_WEEK, HOURS_IN_DAY
from .datetime_utils import event_phase, parse_date_input
from .models import Team, Event, AvailabilitySlot
from .sanitizers import (
    sanitize_name,
    sanitize_description,
    ValidationError as SanitizationError,
)
from .validators import validate_team_pair, validate_week_span


# -----------------------------------------
# TEAM SERIALIZER
# -----------------------------------------
class TeamSerializer(serializers.ModelSerializer):
    class Meta:
        model = Team
        fields = ["id", "name", "color", "created_at"]
        read_only_fields = fields


class TeamSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Team
        fields = ["id", "name", "color"]
        read_only_fields = fields


# -----------------------------------------
# EVENT SERIALIZER (embeds both teams)
# -----------------------------------------
class NormalizedDateField(serializers.DateField):
    """
    Accepts "2024-01-01" as well as full ISO datetimes
    ("2024-01-01T00:00:00.000Z") and keeps only the date part.
    """

    def to_internal_value(self, value):
        parsed = parse_date_input(value)
        if parsed is None:
            self.fail("invalid", format="YYYY-MM-DD")
        return parsed


class EventSerializer(serializers.ModelSerializer):
    start_date = NormalizedDateField()
    end_date = NormalizedDateField()
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    team_a_id = serializers.IntegerField()
    team_b_id = serializers.IntegerField()
    team_a = TeamSummarySerializer(read_only=True)
    team_b = TeamSummarySerializer(read_only=True)

    created_by_email = serializers.CharField(source="created_by.email", read_only=True)
    phase = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = [
            "id",
            "name",
            "description",
            "start_date",
            "end_date",
            "team_a_id",
            "team_b_id",
            "team_a",
            "team_b",
            "created_by",
            "created_by_email",
            "created_at",
            "phase",
        ]
        read_only_fields = [
            "id",
            "created_by",
            "created_by_email",
            "created_at",
            "phase",
        ]

    def get_phase(self, obj) -> str:
        return event_phase(obj)

    def validate_name(self, value):
        try:
            return sanitize_name(value)
        except SanitizationError as e:
            raise serializers.ValidationError(str(e))

    def validate_description(self, value):
        """Sanitize event description (allows limited HTML)."""
        return sanitize_description(value)

    def validate(self, attrs):
        """
        Cross-field validation:
        - end_date must be exactly start_date + 6 days
        - team_a and team_b must differ and both exist
        On update, missing values fall back to the stored event.
        """
        start = attrs.get("start_date")
        end = attrs.get("end_date")
        team_a_id = attrs.get("team_a_id")
        team_b_id = attrs.get("team_b_id")

        if self.instance is not None:
            if start is None:
                start = self.instance.start_date
            if end is None:
                end = self.instance.end_date
            if team_a_id is None:
                team_a_id = self.instance.team_a_id
            if team_b_id is None:
                team_b_id = self.instance.team_b_id

        try:
            validate_week_span(start, end)
        except SanitizationError as e:
            raise serializers.ValidationError({"end_date": str(e)})

        known_ids = Team.objects.filter(
            id__in=[team_a_id, team_b_id]
        ).values_list("id", flat=True)
        try:
            validate_team_pair(team_a_id, team_b_id, known_ids)
        except SanitizationError as e:
            raise serializers.ValidationError({"team_b_id": str(e)})

        return attrs


# -----------------------------------------
# AVAILABILITY SERIALIZERS
# -----------------------------------------
class AvailabilitySlotSerializer(serializers.ModelSerializer):
    """Read shape used by the grid: one row per marked hour, with team info."""
    team_id = serializers.IntegerField(read_only=True)
    team_name = serializers.CharField(source="team.name", read_only=True)
    team_color = serializers.CharField(source="team.color", read_only=True)

    class Meta:
        model = AvailabilitySlot
        fields = ["day_index", "hour_index", "team_id", "team_name", "team_color"]
        read_only_fields = fields


class AvailabilityRowSerializer(serializers.ModelSerializer):
    """Stored row as returned after a save."""
    event_id = serializers.IntegerField(read_only=True)
    user_id = serializers.IntegerField(read_only=True)
    team_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = AvailabilitySlot
        fields = ["id", "event_id", "user_id", "team_id", "day_index", "hour_index", "created_at"]
        read_only_fields = fields


class SlotInputSerializer(serializers.Serializer):
    day_index = serializers.IntegerField(min_value=0, max_value=DAYS_IN_WEEK - 1)
    hour_index = serializers.IntegerField(min_value=0, max_value=HOURS_IN_DAY - 1)


class AvailabilitySaveSerializer(serializers.Serializer):
    """
    Body of POST /api/availability/:
    {"event_id": 1, "team_id": 2, "availability": [{"day_index": 0, "hour_index": 18}, ...]}
    """
    event_id = serializers.IntegerField()
    team_id = serializers.IntegerField()
    availability = SlotInputSerializer(many=True, allow_empty=True)

    def validate(self, attrs):
        event = (
            Event.objects
            .select_related("team_a", "team_b")
            .filter(pk=attrs["event_id"])
            .first()
        )
        if event is None:
            raise NotFound("Event not found")

        if not event.has_team(attrs["team_id"]):
            raise serializers.ValidationError({"team_id": "Invalid team for this event"})

        # Duplicate cells collapse to one slot, first occurrence wins the order
        seen = set()
        cells = []
        for slot in attrs["availability"]:
            cell = (slot["day_index"], slot["hour_index"])
            if cell not in seen:
                seen.add(cell)
                cells.append(cell)

        attrs["event"] = event
        attrs["team"] = event.team_a if event.team_a_id == attrs["team_id"] else event.team_b
        attrs["cells"] = cells
        return attrs
