# events/throttles.py

from rest_framework.throttling import SimpleRateThrottle


class EventCreateThrottle(SimpleRateThrottle):
    """
    Throttle event creation per user.

    Scope key: 'event-create'
    Cache key shape:
      throttle_event-create_u<user_id>
    """
    scope = "event-create"

    def get_cache_key(self, request, view):
        # Only throttle POST (event creation)
        if request.method != "POST":
            return None

        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        return f"throttle_{self.scope}_u{user.id}"


class AvailabilitySaveThrottle(SimpleRateThrottle):
    """
    Throttle availability saves per user per event.

    Scope key: 'availability-save'
    Cache key shape:
      throttle_availability-save_u<user_id>_e<event_id or unknown>
    """
    scope = "availability-save"

    def get_cache_key(self, request, view):
        if request.method != "POST":
            return None

        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        event_id = "unknown"
        if isinstance(request.data, dict):
            event_id = request.data.get("event_id") or "unknown"

        return f"throttle_{self.scope}_u{user.id}_e{event_id}"
