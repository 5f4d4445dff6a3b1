from datetime import time

from django.core.exceptions import ValidationError
from django.db import models
import pytz


class BusinessHoursProfile(models.Model):
    """
    Opening hours of the counter.

    Only the active default profile is consulted. Without one the counter is
    treated as always open and no pickup slot is filtered out.
    """

    TIMEZONE_CHOICES = [(tz, tz) for tz in pytz.common_timezones]

    DAYS_OF_WEEK = [
        (0, "Monday"),
        (1, "Tuesday"),
        (2, "Wednesday"),
        (3, "Thursday"),
        (4, "Friday"),
        (5, "Saturday"),
        (6, "Sunday"),
    ]

    name = models.CharField(max_length=100, help_text="Name for this hours profile")
    timezone = models.CharField(
        max_length=50,
        choices=TIMEZONE_CHOICES,
        default="Europe/Bucharest",
        help_text="Timezone the opening hours are expressed in",
    )
    opening_time = models.TimeField(default=time(7, 0))
    closing_time = models.TimeField(
        default=time(17, 0),
        help_text="May be earlier than the opening time for hours that run past midnight",
    )
    closed_days = models.JSONField(
        default=list,
        blank=True,
        help_text="Weekdays the counter stays closed (0 = Monday ... 6 = Sunday)",
    )
    is_active = models.BooleanField(default=True)
    is_default = models.BooleanField(
        default=False,
        help_text="Default profile used for slot filtering and the public status endpoint",
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Business Hours Profile"
        verbose_name_plural = "Business Hours Profiles"
        ordering = ["-is_default", "name"]

    def __str__(self):
        return f"{self.name} {'(Default)' if self.is_default else ''}".strip()

    def clean(self):
        if self.timezone not in pytz.all_timezones_set:
            raise ValidationError({"timezone": f"Unknown timezone '{self.timezone}'."})
        invalid = [day for day in self.closed_days or [] if day not in range(7)]
        if invalid:
            raise ValidationError({"closed_days": f"Invalid weekday(s): {invalid}"})

    def save(self, *args, **kwargs):
        # Only one default profile may exist
        if self.is_default:
            BusinessHoursProfile.objects.exclude(pk=self.pk).update(is_default=False)
        super().save(*args, **kwargs)

    @property
    def opening_minute(self) -> int:
        return self.opening_time.hour * 60 + self.opening_time.minute

    @property
    def closing_minute(self) -> int:
        return self.closing_time.hour * 60 + self.closing_time.minute
