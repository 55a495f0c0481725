from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from users.models import User
from events.models import AvailabilitySlot, Event, Team
from core.management.commands.seed_data import DEFAULT_TEAMS


class SeedDataCommandTests(TestCase):
    def test_seeds_teams_only_by_default(self):
        call_command("seed_data", stdout=StringIO())

        self.assertEqual(Team.objects.count(), len(DEFAULT_TEAMS))
        self.assertFalse(Event.objects.exists())

    def test_is_idempotent(self):
        call_command("seed_data", "--demo", stdout=StringIO())
        call_command("seed_data", "--demo", stdout=StringIO())

        self.assertEqual(Team.objects.count(), len(DEFAULT_TEAMS))
        self.assertEqual(Event.objects.count(), 1)
        self.assertEqual(User.objects.filter(username__in=["alice", "bob"]).count(), 2)

    def test_demo_event_has_overlapping_availability(self):
        call_command("seed_data", "--demo", stdout=StringIO())

        event = Event.objects.get(name="Demo Scrim Week")
        self.assertEqual((event.end_date - event.start_date).days, 6)
        self.assertEqual(event.start_date.weekday(), 0)

        alice_cells = set(
            AvailabilitySlot.objects.filter(event=event, user__username="alice")
            .values_list("day_index", "hour_index")
        )
        bob_cells = set(
            AvailabilitySlot.objects.filter(event=event, user__username="bob")
            .values_list("day_index", "hour_index")
        )
        self.assertEqual(alice_cells & bob_cells, {(0, 18), (0, 19), (4, 20)})
