from django.core.cache import cache
from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework import status

from users.models import User
from events.models import Event, Team, AvailabilitySlot
from events.validators import DURATION_ERROR, SAME_TEAM_ERROR, MISSING_TEAM_ERROR


class EventApiTestCase(TestCase):
    def setUp(self):
        cache.clear()
        self.client = APIClient()

        self.creator = User.objects.create_user(
            username="creator",
            email="creator@example.com",
            password="pass",
        )
        self.other = User.objects.create_user(
            username="other",
            email="other@example.com",
            password="pass",
        )

        self.trojans = Team.objects.create(name="Trojans", color="#990000")
        self.bruins = Team.objects.create(name="Bruins", color="#2774ae")
        self.ducks = Team.objects.create(name="Ducks", color="#154733")

        self.event = Event.objects.create(
            name="Week 1 Scrims",
            description="",
            start_date="2024-01-01",
            end_date="2024-01-07",
            team_a=self.trojans,
            team_b=self.bruins,
            created_by=self.creator,
        )

    def auth(self, user):
        self.client.force_authenticate(user=user)

    def payload(self, **overrides):
        data = {
            "name": "Week 2 Scrims",
            "description": "Best of three",
            "start_date": "2024-01-08",
            "end_date": "2024-01-14",
            "team_a_id": self.trojans.id,
            "team_b_id": self.ducks.id,
        }
        data.update(overrides)
        return data

    # ---- list / retrieve ------------------------------------------------

    def test_list_embeds_teams_newest_first(self):
        second = Event.objects.create(
            name="Week 2",
            start_date="2024-01-08",
            end_date="2024-01-14",
            team_a=self.bruins,
            team_b=self.ducks,
            created_by=self.other,
        )

        resp = self.client.get("/api/events/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)

        data = resp.json()
        self.assertEqual([e["id"] for e in data], [second.id, self.event.id])
        self.assertEqual(data[1]["team_a"], {"id": self.trojans.id, "name": "Trojans", "color": "#990000"})
        self.assertEqual(data[1]["team_b"]["name"], "Bruins")
        self.assertEqual(data[1]["start_date"], "2024-01-01")
        self.assertEqual(data[1]["phase"], "past")

    def test_list_filters_by_team_and_search(self):
        Event.objects.create(
            name="Ducks Invitational",
            start_date="2024-01-08",
            end_date="2024-01-14",
            team_a=self.bruins,
            team_b=self.ducks,
            created_by=self.other,
        )

        resp = self.client.get(f"/api/events/?team={self.trojans.id}")
        self.assertEqual([e["id"] for e in resp.json()], [self.event.id])

        resp = self.client.get("/api/events/?search=invitational")
        self.assertEqual([e["name"] for e in resp.json()], ["Ducks Invitational"])

    def test_list_is_empty_without_events(self):
        Event.objects.all().delete()
        resp = self.client.get("/api/events/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json(), [])

    def test_retrieve(self):
        resp = self.client.get(f"/api/events/{self.event.id}/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["name"], "Week 1 Scrims")
        self.assertEqual(resp.json()["created_by"], self.creator.id)

    def test_retrieve_missing_event(self):
        resp = self.client.get("/api/events/999999/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(resp.json(), {"error": "Event not found"})

    # ---- create ---------------------------------------------------------

    def test_create_requires_authentication(self):
        resp = self.client.post("/api/events/", self.payload(), format="json")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertIn("error", resp.json())

    def test_create_sets_creator(self):
        self.auth(self.other)
        resp = self.client.post("/api/events/", self.payload(), format="json")
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)

        data = resp.json()
        self.assertEqual(data["created_by"], self.other.id)
        self.assertEqual(data["team_a"]["id"], self.trojans.id)
        self.assertEqual(data["team_b"]["id"], self.ducks.id)
        self.assertTrue(Event.objects.filter(pk=data["id"], created_by=self.other).exists())

    def test_create_accepts_datetime_strings(self):
        self.auth(self.other)
        resp = self.client.post(
            "/api/events/",
            self.payload(start_date="2024-01-08T00:00:00.000Z", end_date="2024-01-14T00:00:00.000Z"),
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertEqual(resp.json()["end_date"], "2024-01-14")

    def test_create_rejects_wrong_duration(self):
        self.auth(self.other)
        for end_date in ("2024-01-15", "2024-01-13"):
            resp = self.client.post("/api/events/", self.payload(end_date=end_date), format="json")
            self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
            self.assertEqual(resp.json()["error"], DURATION_ERROR)

        self.assertEqual(Event.objects.count(), 1)

    def test_create_rejects_same_team(self):
        self.auth(self.other)
        resp = self.client.post(
            "/api/events/",
            self.payload(team_b_id=self.trojans.id),
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], SAME_TEAM_ERROR)

    def test_create_rejects_unknown_team(self):
        self.auth(self.other)
        resp = self.client.post("/api/events/", self.payload(team_b_id=999999), format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], MISSING_TEAM_ERROR)

    def test_create_rejects_missing_fields(self):
        self.auth(self.other)
        resp = self.client.post("/api/events/", {"name": "No dates"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)

        body = resp.json()
        self.assertIn("error", body)
        self.assertIn("start_date", body["details"])
        self.assertIn("team_a_id", body["details"])

    def test_create_sanitizes_name(self):
        self.auth(self.other)
        resp = self.client.post(
            "/api/events/",
            self.payload(name="<script>x</script>Finals"),
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_201_CREATED)
        self.assertNotIn("<script>", resp.json()["name"])

    # ---- update ---------------------------------------------------------

    def test_creator_can_update(self):
        self.auth(self.creator)
        resp = self.client.patch(
            f"/api/events/{self.event.id}/",
            {"name": "Renamed", "team_b_id": self.ducks.id},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["name"], "Renamed")
        self.assertEqual(resp.json()["team_b"]["id"], self.ducks.id)

        self.event.refresh_from_db()
        self.assertEqual(self.event.team_b_id, self.ducks.id)

    def test_team_change_removes_slots_of_dropped_team(self):
        AvailabilitySlot.objects.create(
            event=self.event, user=self.creator, team=self.trojans, day_index=0, hour_index=18,
        )
        AvailabilitySlot.objects.create(
            event=self.event, user=self.other, team=self.bruins, day_index=0, hour_index=18,
        )

        self.auth(self.creator)
        resp = self.client.patch(
            f"/api/events/{self.event.id}/",
            {"team_a_id": self.ducks.id},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["team_a"]["id"], self.ducks.id)

        remaining = set(
            AvailabilitySlot.objects.filter(event=self.event).values_list("team_id", flat=True)
        )
        self.assertEqual(remaining, {self.bruins.id})

    def test_update_without_team_change_keeps_slots(self):
        AvailabilitySlot.objects.create(
            event=self.event, user=self.creator, team=self.trojans, day_index=1, hour_index=19,
        )

        self.auth(self.creator)
        resp = self.client.patch(f"/api/events/{self.event.id}/", {"name": "Renamed"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(AvailabilitySlot.objects.filter(event=self.event).count(), 1)

    def test_update_keeps_week_rule(self):
        self.auth(self.creator)
        resp = self.client.patch(
            f"/api/events/{self.event.id}/",
            {"end_date": "2024-01-10"},
            format="json",
        )
        self.assertEqual(resp.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(resp.json()["error"], DURATION_ERROR)

    def test_non_creator_cannot_update(self):
        self.auth(self.other)
        resp = self.client.patch(f"/api/events/{self.event.id}/", {"name": "Hijacked"}, format="json")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)

        self.event.refresh_from_db()
        self.assertEqual(self.event.name, "Week 1 Scrims")

    # ---- delete ---------------------------------------------------------

    def test_creator_can_delete_and_slots_go_with_it(self):
        AvailabilitySlot.objects.create(
            event=self.event,
            user=self.creator,
            team=self.trojans,
            day_index=0,
            hour_index=18,
        )

        self.auth(self.creator)
        resp = self.client.delete(f"/api/events/{self.event.id}/")
        self.assertEqual(resp.status_code, status.HTTP_204_NO_CONTENT)

        self.assertFalse(Event.objects.filter(pk=self.event.id).exists())
        self.assertFalse(AvailabilitySlot.objects.filter(event_id=self.event.id).exists())

    def test_non_creator_cannot_delete(self):
        self.auth(self.other)
        resp = self.client.delete(f"/api/events/{self.event.id}/")
        self.assertEqual(resp.status_code, status.HTTP_403_FORBIDDEN)
        self.assertIn("error", resp.json())
        self.assertTrue(Event.objects.filter(pk=self.event.id).exists())

    def test_delete_missing_event(self):
        self.auth(self.creator)
        resp = self.client.delete("/api/events/999999/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)

    def test_delete_requires_authentication(self):
        resp = self.client.delete(f"/api/events/{self.event.id}/")
        self.assertEqual(resp.status_code, status.HTTP_401_UNAUTHORIZED)


class TeamApiTestCase(TestCase):
    def setUp(self):
        self.client = APIClient()
        Team.objects.create(name="Trojans", color="#990000")
        Team.objects.create(name="Bruins", color="#2774ae")

    def test_list_is_public_and_ordered_by_name(self):
        resp = self.client.get("/api/teams/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual([t["name"] for t in resp.json()], ["Bruins", "Trojans"])

    def test_retrieve(self):
        team = Team.objects.get(name="Trojans")
        resp = self.client.get(f"/api/teams/{team.id}/")
        self.assertEqual(resp.status_code, status.HTTP_200_OK)
        self.assertEqual(resp.json()["color"], "#990000")

    def test_retrieve_missing_team(self):
        resp = self.client.get("/api/teams/999999/")
        self.assertEqual(resp.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn("error", resp.json())
