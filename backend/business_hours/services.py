from datetime import date, datetime, timedelta
from typing import Dict, Iterable, List, Optional

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone
import pytz

from .models import BusinessHoursProfile

MINUTES_PER_DAY = 24 * 60


class BusinessHoursService:
    """Service class for handling all business hours logic"""

    CACHE_TIMEOUT = 300  # 5 minutes
    CACHE_KEY = "business_hours_profile_default"

    def __init__(self, profile: Optional[BusinessHoursProfile] = None):
        """
        Args:
            profile: Profile to use. If None, the active default profile is loaded lazily.
        """
        self._profile = profile
        self._loaded = profile is not None

    @property
    def profile(self) -> Optional[BusinessHoursProfile]:
        """The active default profile, or None when no opening hours are configured."""
        if not self._loaded:
            profile = cache.get(self.CACHE_KEY)
            if profile is None:
                profile = BusinessHoursProfile.objects.filter(is_default=True, is_active=True).first()
                if profile is not None:
                    cache.set(self.CACHE_KEY, profile, self.CACHE_TIMEOUT)
            self._profile = profile
            self._loaded = True
        return self._profile

    @property
    def timezone_name(self) -> str:
        return self.profile.timezone if self.profile else settings.TIME_ZONE

    def local_now(self, dt: Optional[datetime] = None) -> datetime:
        """
        Convert a datetime to the business timezone.

        Naive datetimes are taken to be local already.
        """
        if dt is None:
            dt = timezone.now()

        business_tz = pytz.timezone(self.timezone_name)
        if timezone.is_naive(dt):
            return business_tz.localize(dt)
        return dt.astimezone(business_tz)

    def is_minute_open(self, minute: int, day: date) -> bool:
        """
        Check whether a minute-of-day on a given date falls inside opening hours.

        Minutes past 1440 belong to the following day. Closing time is exclusive.
        """
        profile = self.profile
        if profile is None:
            return True

        day = day + timedelta(days=minute // MINUTES_PER_DAY)
        minute = minute % MINUTES_PER_DAY
        opening = profile.opening_minute
        closing = profile.closing_minute

        if opening == closing:
            # Open around the clock
            return day.weekday() not in (profile.closed_days or [])

        if opening < closing:
            return day.weekday() not in (profile.closed_days or []) and opening <= minute < closing

        # Overnight hours, e.g. 22:00 - 02:00
        if minute >= opening:
            return day.weekday() not in (profile.closed_days or [])
        if minute < closing:
            previous_day = day - timedelta(days=1)
            return previous_day.weekday() not in (profile.closed_days or [])
        return False

    def is_open(self, dt: Optional[datetime] = None) -> bool:
        """
        Check if the business is open at a specific datetime

        Args:
            dt: Datetime to check. If None, uses current time.
        """
        local_dt = self.local_now(dt)
        return self.is_minute_open(local_dt.hour * 60 + local_dt.minute, local_dt.date())

    def filter_slots(self, slots: Iterable, day: date) -> List:
        """Drop pickup slots whose start falls outside opening hours on the given day."""
        slots = list(slots)
        if self.profile is None:
            return slots
        return [slot for slot in slots if self.is_minute_open(slot.start_minute, day)]

    def get_status_summary(self, dt: Optional[datetime] = None) -> Dict:
        """
        Get status summary

        Args:
            dt: Datetime to check status for. If None, uses current time.

        Returns:
            Dict with current status, the configured hours and the timezone
        """
        local_dt = self.local_now(dt)
        profile = self.profile

        summary = {
            "is_open": self.is_open(local_dt),
            "current_time": local_dt.isoformat(),
            "timezone": self.timezone_name,
            "has_profile": profile is not None,
        }
        if profile is not None:
            summary.update({
                "profile": profile.name,
                "opening_time": profile.opening_time.strftime("%H:%M"),
                "closing_time": profile.closing_time.strftime("%H:%M"),
                "closed_days": list(profile.closed_days or []),
            })
        return summary

    @classmethod
    def clear_cache(cls):
        """Clear the cached default profile"""
        cache.delete(cls.CACHE_KEY)
