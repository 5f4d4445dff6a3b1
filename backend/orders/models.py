import uuid

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class OrderStatus(models.TextChoices):
    NEW = "NEW", _("New")
    IN_PROGRESS = "IN_PROGRESS", _("In progress")
    READY = "READY", _("Ready")


class Order(models.Model):
    """
    The internal order record. Staff-only.

    Customers never read this model; they see the PublicOrderStatus projection
    keyed by the tracking code.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    code = models.CharField(
        max_length=6,
        unique=True,
        help_text=_("Short tracking code given to the customer"),
    )
    pickup_date = models.DateField(db_index=True)
    pickup_start_minute = models.PositiveIntegerField(help_text=_("Minutes since midnight of pickup_date"))
    pickup_time_label = models.CharField(max_length=20)
    total = models.DecimalField(max_digits=10, decimal_places=2)
    status = models.CharField(
        max_length=20,
        choices=OrderStatus.choices,
        default=OrderStatus.NEW,
        db_index=True,
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        ordering = ["pickup_date", "pickup_start_minute", "created_at"]
        indexes = [
            models.Index(fields=["pickup_date", "pickup_start_minute"], name="order_pickup_idx"),
            models.Index(fields=["status", "pickup_date"], name="order_status_date_idx"),
        ]

    def __str__(self):
        return f"Order {self.code} ({self.pickup_date} {self.pickup_time_label}) - {self.get_status_display()}"

    @property
    def is_open(self) -> bool:
        return self.status != OrderStatus.READY


class OrderItem(models.Model):
    """
    One cart line as it was priced at admission.

    Name and price are copied from the catalog so later catalog edits or
    deletions never change a past order.
    """

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product_id = models.PositiveBigIntegerField(null=True, blank=True)
    name = models.CharField(max_length=200)
    display_name = models.CharField(max_length=500)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    custom = models.JSONField(
        null=True,
        blank=True,
        help_text=_("Chosen options and salads, when the product is configurable"),
    )
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return f"{self.display_name} ({self.price})"


class PublicOrderStatus(models.Model):
    """Customer-facing status projection, readable by anyone holding the code."""

    code = models.CharField(max_length=6, primary_key=True)
    status = models.CharField(max_length=20, choices=OrderStatus.choices, default=OrderStatus.NEW)
    pickup_time_label = models.CharField(max_length=20)
    pickup_date = models.DateField()
    updated_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Public Order Status")
        verbose_name_plural = _("Public Order Statuses")

    def __str__(self):
        return f"{self.code}: {self.status}"


class PublicCapacityEntry(models.Model):
    """One row per admitted order, used to count slot occupancy without exposing orders."""

    order_id = models.UUIDField(primary_key=True)
    pickup_time_label = models.CharField(max_length=20)
    pickup_start_minute = models.PositiveIntegerField()
    pickup_date = models.DateField()
    created_at = models.DateTimeField(default=timezone.now)

    class Meta:
        verbose_name = _("Public Capacity Entry")
        verbose_name_plural = _("Public Capacity Entries")
        indexes = [
            models.Index(fields=["pickup_date", "pickup_start_minute"], name="capacity_entry_slot_idx"),
        ]

    def __str__(self):
        return f"{self.pickup_date} {self.pickup_time_label}"
