import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Team",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=100, unique=True)),
                ("color", models.CharField(default="#990000", help_text="Hex display color, e.g. #1d4ed8", max_length=7)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255)),
                ("description", models.TextField(blank=True, default="")),
                ("start_date", models.DateField()),
                ("end_date", models.DateField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "created_by",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="created_events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "team_a",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="events_as_team_a",
                        to="events.team",
                    ),
                ),
                (
                    "team_b",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="events_as_team_b",
                        to="events.team",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["created_by", "created_at"], name="event_creator_created_idx"),
                    models.Index(fields=["created_at"], name="event_created_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("team_a", models.F("team_b")), _negated=True),
                        name="event_distinct_teams",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="AvailabilitySlot",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "day_index",
                    models.PositiveSmallIntegerField(
                        help_text="0 = Monday ... 6 = Sunday",
                        validators=[django.core.validators.MaxValueValidator(6)],
                    ),
                ),
                (
                    "hour_index",
                    models.PositiveSmallIntegerField(
                        help_text="0 ... 23, local time",
                        validators=[django.core.validators.MaxValueValidator(23)],
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="availability",
                        to="events.event",
                    ),
                ),
                (
                    "team",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="availability_slots",
                        to="events.team",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="availability_slots",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["day_index", "hour_index"],
                "indexes": [
                    models.Index(fields=["event", "user"], name="availability_event_user_idx"),
                    models.Index(fields=["event", "day_index", "hour_index"], name="availability_event_cell_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("event", "user", "day_index", "hour_index"),
                        name="availability_unique_user_cell",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("day_index__lte", 6)),
                        name="availability_day_in_week",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("hour_index__lte", 23)),
                        name="availability_hour_in_day",
                    ),
                ],
            },
        ),
    ]
