from django.db import models
from django.utils import timezone


class SlotCounter(models.Model):
    """
    Number of orders admitted for one pickup slot on one day.

    Keyed by date and start minute, never by the display label. Rows are created
    on the first reservation and only ever incremented.
    """

    pickup_date = models.DateField()
    pickup_start_minute = models.PositiveIntegerField(help_text="Minutes since midnight of pickup_date")
    label = models.CharField(max_length=20)
    count = models.PositiveIntegerField(default=0)
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = "Slot Counter"
        verbose_name_plural = "Slot Counters"
        ordering = ["pickup_date", "pickup_start_minute"]
        constraints = [
            models.UniqueConstraint(
                fields=["pickup_date", "pickup_start_minute"],
                name="unique_slot_counter_per_day",
            ),
        ]

    def __str__(self):
        return f"{self.pickup_date} {self.label}: {self.count}"
