import time

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from rest_framework.views import APIView
from rest_framework.permissions import AllowAny
from rest_framework.response import Response

from events.models import Team


class HealthCheckView(APIView):
    """
    GET /api/health/

    Uptime probe: database reachability, whether the team registry has
    been seeded, and which token verification mode is active.
    """
    permission_classes = [AllowAny]
    authentication_classes = []

    def get(self, request, *args, **kwargs):
        started = time.monotonic()

        try:
            with connections["default"].cursor() as cursor:
                cursor.execute("SELECT 1")
            db_ok = True
        except OperationalError:
            db_ok = False

        teams_seeded = db_ok and Team.objects.exists()

        if getattr(settings, "SUPABASE_JWT_SECRET", ""):
            auth_mode = "local"
        elif getattr(settings, "SUPABASE_URL", ""):
            auth_mode = "remote"
        else:
            auth_mode = "disabled"

        return Response({
            "status": "ok" if db_ok else "degraded",
            "db": db_ok,
            "teams_seeded": teams_seeded,
            "auth_mode": auth_mode,
            "env": getattr(settings, "ENV", "unknown"),
            "latency_ms": int((time.monotonic() - started) * 1000),
        })
