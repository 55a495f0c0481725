from django.urls import path
from ux.views.scheduling import UXEventGridView

urlpatterns = [
    path(
        "events/<int:event_id>/grid/",
        UXEventGridView.as_view(),
        name="ux-event-grid",
    ),
]
