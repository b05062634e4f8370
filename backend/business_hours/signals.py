from django.db import transaction
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver
import logging

from .models import BusinessHoursProfile
from .services import BusinessHoursService

logger = logging.getLogger(__name__)


def _invalidate(store_location_id):
    """
    Drop the cached hours now and again once the transaction commits.

    A reader running between the first delete and the commit still sees the
    old row and may cache it; the second delete removes that copy.
    """
    BusinessHoursService.clear_cache(store_location_id)
    transaction.on_commit(lambda: BusinessHoursService.clear_cache(store_location_id))


@receiver(post_save, sender=BusinessHoursProfile)
@receiver(post_delete, sender=BusinessHoursProfile)
def clear_profile_cache(sender, instance, **kwargs):
    """Clear cache when profile is updated or deleted"""
    _invalidate(instance.store_location_id)


@receiver(post_save, sender='settings.StoreLocation')
@receiver(post_delete, sender='settings.StoreLocation')
def clear_store_location_cache(sender, instance, **kwargs):
    """
    The cached business hours carry the store's timezone, so a store
    location change invalidates them as well.
    """
    logger.debug(f"Clearing business hours cache for store location {instance.pk}")
    _invalidate(instance.pk)
