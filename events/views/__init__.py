from .events import (
    EventListCreateView,
    EventDetailView,
)
from .teams import TeamViewSet
from .availability import (
    EventAvailabilityView,
    MyEventAvailabilityView,
    AvailabilitySaveView,
)
from .generics import api_error
