# ux/views/scheduling.py

from rest_framework import serializers
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django.shortcuts import get_object_or_404

from events.availability_matrix import DAYS_IN_WEEK, HOURS_IN_DAY
from events.models import Event
from events.sanitizers import ValidationError as SanitizationError
from events.views.generics import parse_int_param
from ux.services.scheduling import build_event_grid, resolve_viewer_team


class GridPreviewSerializer(serializers.Serializer):
    team_id = serializers.IntegerField(required=False)
    matrix = serializers.ListField(
        child=serializers.ListField(
            child=serializers.BooleanField(),
            min_length=HOURS_IN_DAY,
            max_length=HOURS_IN_DAY,
        ),
        min_length=DAYS_IN_WEEK,
        max_length=DAYS_IN_WEEK,
    )


class UXEventGridView(APIView):
    """
    GET  /api/ux/events/<event_id>/grid/?team_id=<id>
         grid classified against the viewer's saved availability
    POST /api/ux/events/<event_id>/grid/  {"team_id": 1, "matrix": [[...24 bools] x 7]}
         grid classified against an unsaved, in-progress selection
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        event = get_object_or_404(Event.objects.select_related("team_a", "team_b"), pk=event_id)
        team_id = parse_int_param(request.query_params.get("team_id"))
        return self._respond(event, request.user, team_id)

    def post(self, request, event_id):
        event = get_object_or_404(Event.objects.select_related("team_a", "team_b"), pk=event_id)
        serializer = GridPreviewSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        return self._respond(
            event,
            request.user,
            serializer.validated_data.get("team_id"),
            matrix=serializer.validated_data["matrix"],
        )

    def _respond(self, event, user, team_id, matrix=None):
        try:
            team = resolve_viewer_team(event, user, team_id)
        except SanitizationError as e:
            raise serializers.ValidationError({"team_id": str(e)})

        grid = build_event_grid(event, user, team, matrix=matrix)

        return Response({
            "meta": {"success": True},
            "data": grid,
        })
