"""Django signals for cache invalidation.

Invalidation is deferred until the surrounding transaction commits, so a
concurrent read cannot re-cache a value that is about to change.
"""

from functools import partial

from django.db import transaction
from django.db.models.signals import m2m_changed, post_delete, post_save
from django.dispatch import receiver

from screenings.cache import invalidate_screening
from screenings.models import Room, Screening, Ticket


def invalidate_on_commit(screening_ids) -> None:
    for screening_id in screening_ids:
        transaction.on_commit(partial(invalidate_screening, screening_id))


@receiver([post_save, post_delete], sender=Screening)
def invalidate_screening_cache(sender, instance, **kwargs):
    """Invalidate the detail cache when a screening is saved or deleted."""
    invalidate_on_commit([instance.pk])


@receiver(post_save, sender=Room)
def invalidate_room_screenings_cache(sender, instance, created, **kwargs):
    """Capacity changes alter the occupancy of every screening in the room."""
    if created:
        return
    invalidate_on_commit(list(instance.screenings.values_list("pk", flat=True)))


@receiver(m2m_changed, sender=Ticket.screenings.through)
def invalidate_ticket_screenings_cache(sender, instance, action, reverse, pk_set, **kwargs):
    """Invalidate occupancy when tickets are attached to or detached from screenings."""
    if action not in ("post_add", "post_remove", "pre_clear"):
        return
    if reverse:
        # instance is a Screening
        invalidate_on_commit([instance.pk])
        return
    if action == "pre_clear":
        pk_set = set(instance.screenings.values_list("pk", flat=True))
    invalidate_on_commit(pk_set or ())
