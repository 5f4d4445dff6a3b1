from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from .models import BusinessHoursProfile
from .services import BusinessHoursService


@receiver([post_save, post_delete], sender=BusinessHoursProfile)
def clear_business_hours_cache(sender, instance, **kwargs):
    """Invalidate the cached default profile when any profile changes"""
    BusinessHoursService.clear_cache()
