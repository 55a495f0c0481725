# events/urls_availability.py - Availability store API

from django.urls import path
from .views import (
    EventAvailabilityView,
    MyEventAvailabilityView,
    AvailabilitySaveView,
)

urlpatterns = [
    path("", AvailabilitySaveView.as_view(), name="availability-save"),
    path("event/<int:event_id>/", EventAvailabilityView.as_view(), name="event-availability"),
    path("event/<int:event_id>/user/", MyEventAvailabilityView.as_view(), name="my-event-availability"),
]
