# events/services.py
import logging

from django.db import transaction

from .models import AvailabilitySlot

logger = logging.getLogger('scheduler.events')


class AvailabilityService:
    @staticmethod
    def slots_for_event(event, user=None):
        """
        All slots of an event (every user, every team), optionally
        narrowed to one user.
        """
        qs = AvailabilitySlot.objects.filter(event=event).select_related("team")
        if user is not None:
            qs = qs.filter(user=user)
        return qs.order_by("day_index", "hour_index", "team_id")

    @staticmethod
    def replace_for_user(event, user, team, cells):
        """
        Replace everything `user` has marked for `event` with `cells`.

        Delete-then-insert inside one transaction: readers never see a
        half-written set, and nothing from the previous save survives.
        Only the (event, user) pair is touched, so concurrent saves by
        other users of the same event never conflict.

        Returns the stored rows.
        """
        with transaction.atomic():
            deleted, _ = AvailabilitySlot.objects.filter(event=event, user=user).delete()
            AvailabilitySlot.objects.bulk_create([
                AvailabilitySlot(
                    event=event,
                    user=user,
                    team=team,
                    day_index=day,
                    hour_index=hour,
                )
                for day, hour in cells
            ])

        logger.info(
            f"Availability replaced: event={event.id}, user={user.id}, team={team.id}, "
            f"removed={deleted}, inserted={len(cells)}"
        )

        return list(
            AvailabilitySlot.objects
            .filter(event=event, user=user)
            .order_by("day_index", "hour_index")
        )

    @staticmethod
    def drop_foreign_team_slots(event):
        """
        Delete slots whose team is no longer one of the event's two teams.

        Called after an event's team pair changes; must run inside the
        same transaction as the event update. Returns the number removed.
        """
        deleted, _ = (
            AvailabilitySlot.objects
            .filter(event=event)
            .exclude(team_id__in=[event.team_a_id, event.team_b_id])
            .delete()
        )
        if deleted:
            logger.info(
                f"Availability pruned after team change: event={event.id}, removed={deleted}"
            )
        return deleted
