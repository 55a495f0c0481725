from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework import status

from events.models import Event
from events.serializers import (
    AvailabilitySaveSerializer,
    AvailabilityRowSerializer,
    AvailabilitySlotSerializer,
)
from events.services import AvailabilityService
from events.throttles import AvailabilitySaveThrottle
from .generics import api_error


class EventAvailabilityView(APIView):
    """
    GET /api/availability/event/<event_id>/
    Every marked hour of the event, across all users and both teams.
    """
    permission_classes = [AllowAny]

    def get(self, request, event_id):
        event = Event.objects.filter(pk=event_id).first()
        if event is None:
            return api_error("Event not found", status.HTTP_404_NOT_FOUND)

        slots = AvailabilityService.slots_for_event(event)
        return Response(AvailabilitySlotSerializer(slots, many=True).data)


class MyEventAvailabilityView(APIView):
    """
    GET /api/availability/event/<event_id>/user/
    Same shape, only the requesting user's hours.
    """
    permission_classes = [IsAuthenticated]

    def get(self, request, event_id):
        event = Event.objects.filter(pk=event_id).first()
        if event is None:
            return api_error("Event not found", status.HTTP_404_NOT_FOUND)

        slots = AvailabilityService.slots_for_event(event, user=request.user)
        return Response(AvailabilitySlotSerializer(slots, many=True).data)


class AvailabilitySaveView(APIView):
    """
    POST /api/availability/
    Body: {"event_id": 1, "team_id": 2, "availability": [{"day_index": 0, "hour_index": 18}]}

    Replaces the requesting user's slots for the event (last write wins).
    """
    permission_classes = [IsAuthenticated]
    throttle_classes = [AvailabilitySaveThrottle]

    def post(self, request):
        serializer = AvailabilitySaveSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        rows = AvailabilityService.replace_for_user(
            event=data["event"],
            user=request.user,
            team=data["team"],
            cells=data["cells"],
        )

        return Response(
            AvailabilityRowSerializer(rows, many=True).data,
            status=status.HTTP_201_CREATED,
        )
