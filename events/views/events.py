import logging

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticatedOrReadOnly
from rest_framework import status
from django.db import transaction
from django.db.models import Q

from events.models import Event
from events.permissions import is_event_creator
from events.serializers import EventSerializer
from events.services import AvailabilityService
from events.throttles import EventCreateThrottle
from .generics import api_error, parse_int_param

logger = logging.getLogger("scheduler.events")


class EventListCreateView(APIView):
    """
    GET  /api/events/   -> every event, newest first, teams embedded
    POST /api/events/   -> create (authenticated)
    """
    permission_classes = [IsAuthenticatedOrReadOnly]
    throttle_classes = [EventCreateThrottle]

    def get(self, request):
        qs = Event.objects.select_related("team_a", "team_b", "created_by")

        team_id = parse_int_param(request.query_params.get("team"))
        if team_id is not None:
            qs = qs.filter(Q(team_a_id=team_id) | Q(team_b_id=team_id))

        search = request.query_params.get("search")
        if search:
            qs = qs.filter(
                Q(name__icontains=search) |
                Q(description__icontains=search)
            )

        qs = qs.order_by("-created_at", "-id")

        serializer = EventSerializer(qs, many=True, context={"request": request})
        return Response(serializer.data)

    def post(self, request):
        serializer = EventSerializer(
            data=request.data,
            context={"request": request},
        )
        serializer.is_valid(raise_exception=True)

        event = serializer.save(created_by=request.user)
        logger.info(
            f"Event created: event={event.id}, teams=({event.team_a_id}, {event.team_b_id}), "
            f"creator={request.user.id}"
        )

        return Response(EventSerializer(event).data, status=status.HTTP_201_CREATED)


class EventDetailView(APIView):
    """
    GET         /api/events/<pk>/   -> single event
    PUT / PATCH /api/events/<pk>/   -> partial update (creator only)
    DELETE      /api/events/<pk>/   -> delete (creator only)
    """
    permission_classes = [IsAuthenticatedOrReadOnly]

    def get_object(self, pk):
        try:
            return Event.objects.select_related("team_a", "team_b", "created_by").get(pk=pk)
        except Event.DoesNotExist:
            return None

    def get(self, request, pk):
        event = self.get_object(pk)
        if event is None:
            return api_error("Event not found", status.HTTP_404_NOT_FOUND)

        serializer = EventSerializer(event, context={"request": request})
        return Response(serializer.data)

    def put(self, request, pk):
        event = self.get_object(pk)
        if event is None:
            return api_error("Event not found", status.HTTP_404_NOT_FOUND)

        if not is_event_creator(request.user, event):
            return api_error("You do not have permission to edit this event.", status.HTTP_403_FORBIDDEN)

        serializer = EventSerializer(event, data=request.data, partial=True, context={"request": request})
        serializer.is_valid(raise_exception=True)

        # Slots must always belong to one of the event's current teams
        with transaction.atomic():
            event = serializer.save()
            AvailabilityService.drop_foreign_team_slots(event)
        logger.info(f"Event updated: event={event.id}, by={request.user.id}")

        return Response(EventSerializer(event).data)

    def patch(self, request, pk):
        return self.put(request, pk)

    def delete(self, request, pk):
        event = self.get_object(pk)
        if event is None:
            return api_error("Event not found", status.HTTP_404_NOT_FOUND)

        if not is_event_creator(request.user, event):
            return api_error("You do not have permission to delete this event.", status.HTTP_403_FORBIDDEN)

        event_id = event.id
        event.delete()
        logger.info(f"Event deleted: event={event_id}, by={request.user.id}")

        return Response(status=status.HTTP_204_NO_CONTENT)
