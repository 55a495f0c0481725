# events/urls_teams.py - Separate URL configuration for teams API

from rest_framework.routers import SimpleRouter
from .views.teams import TeamViewSet

router = SimpleRouter()
router.register(r'', TeamViewSet, basename='team')

urlpatterns = router.urls
