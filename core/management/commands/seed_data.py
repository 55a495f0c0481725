from datetime import timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from events.availability_matrix import empty_matrix, slots_from_matrix
from events.datetime_utils import today, week_end_for
from events.models import Team, Event
from events.selection import paint
from events.services import AvailabilityService

User = get_user_model()

DEFAULT_TEAMS = [
    ("Trojans", "#990000"),
    ("Bruins", "#2774ae"),
    ("Cardinal", "#8c1515"),
    ("Golden Bears", "#fdb515"),
    ("Ducks", "#154733"),
    ("Huskies", "#4b2e83"),
]


class Command(BaseCommand):
    help = "Seeds the database with the default teams and, optionally, a demo event with availability"

    def add_arguments(self, parser):
        parser.add_argument(
            "--demo",
            action="store_true",
            help="Also create a demo event for next Monday with two users' availability",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write("Seeding data...")

        # 1. Teams
        for name, color in DEFAULT_TEAMS:
            team, created = Team.objects.get_or_create(name=name, defaults={"color": color})
            self.stdout.write(f"{'Created' if created else 'Found'} team: {team.name}")

        if not options["demo"]:
            self.stdout.write(self.style.SUCCESS("Teams seeded."))
            return

        # 2. Demo users
        alice, _ = User.objects.get_or_create(username="alice", defaults={"email": "alice@example.com"})
        bob, _ = User.objects.get_or_create(username="bob", defaults={"email": "bob@example.com"})

        team_a = Team.objects.get(name=DEFAULT_TEAMS[0][0])
        team_b = Team.objects.get(name=DEFAULT_TEAMS[1][0])

        # 3. Demo event: the coming week, Monday to Sunday
        start = today()
        start += timedelta(days=(7 - start.weekday()) % 7)
        event, created = Event.objects.get_or_create(
            name="Demo Scrim Week",
            created_by=alice,
            defaults={
                "description": "Seeded event for trying out the availability grid.",
                "start_date": start,
                "end_date": week_end_for(start),
                "team_a": team_a,
                "team_b": team_b,
            },
        )
        self.stdout.write(f"{'Created' if created else 'Found'} event: {event.name}")

        # 4. Availability, drawn the way a user would drag across the grid
        alice_matrix = empty_matrix()
        paint(alice_matrix, [(0, hour) for hour in range(18, 22)])  # Monday evening
        paint(alice_matrix, [(1, 19), (1, 20)])                     # Tuesday
        paint(alice_matrix, [(day, 20) for day in range(2, 5)])     # Wed-Fri 8 PM

        bob_matrix = empty_matrix()
        paint(bob_matrix, [(0, hour) for hour in range(17, 20)])
        paint(bob_matrix, [(4, hour) for hour in range(19, 23)])

        for user, team, matrix in ((alice, team_a, alice_matrix), (bob, team_b, bob_matrix)):
            cells = [(slot["day_index"], slot["hour_index"]) for slot in slots_from_matrix(matrix)]
            AvailabilityService.replace_for_user(event, user, team, cells)
            self.stdout.write(f"Saved {len(cells)} slots for {user.username} ({team.name})")

        self.stdout.write(self.style.SUCCESS("Demo data seeded."))
