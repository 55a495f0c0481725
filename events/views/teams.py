# events/views/teams.py - Team registry API (read-only)

from rest_framework import viewsets
from rest_framework.permissions import AllowAny

from events.models import Team
from events.serializers import TeamSerializer


class TeamViewSet(viewsets.ReadOnlyModelViewSet):
    """
    GET /api/teams/        -> every team, ordered by name
    GET /api/teams/<pk>/   -> one team

    Teams are created through the admin or `manage.py seed_data`.
    """
    queryset = Team.objects.all().order_by("name")
    serializer_class = TeamSerializer
    permission_classes = [AllowAny]
    pagination_class = None
