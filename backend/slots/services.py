from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple
import logging

from django.apps import apps
from django.db import transaction
from django.db.models import Count, F
from django.utils import timezone

from business_hours.services import BusinessHoursService
from .config import slot_settings
from .exceptions import SlotFullError
from .generator import MINUTES_PER_DAY, PickupSlot, generate_slots, is_slot_closed, is_slot_full
from .models import SlotCounter

logger = logging.getLogger(__name__)


def pickup_key(today: date, start_minute: int) -> Tuple[date, int]:
    """
    Normalise a slot start relative to `today` into (pickup date, minute of that day).

    Slots generated late in the evening can start at 1440 or later, which is the
    following day.
    """
    days, minute = divmod(start_minute, MINUTES_PER_DAY)
    return today + timedelta(days=days), minute


class SlotCapacityLedger:
    """Per day and slot reservation counters."""

    @staticmethod
    def reserve(pickup_date: date, start_minute: int, limit: int, label: str) -> SlotCounter:
        """
        Take one unit of capacity for (pickup_date, start_minute).

        Must run inside the admission transaction so the increment commits or
        rolls back together with the order. The increment is a single conditional
        UPDATE, so concurrent callers on the same key serialize on the row and at
        most `limit` of them succeed. Raises SlotFullError without writing when
        the slot has no room left.
        """
        if not transaction.get_connection().in_atomic_block:
            raise RuntimeError("SlotCapacityLedger.reserve must be called inside a transaction")

        counter, created = SlotCounter.objects.get_or_create(
            pickup_date=pickup_date,
            pickup_start_minute=start_minute,
            defaults={"label": label},
        )
        if created:
            logger.debug(f"Opened slot counter {pickup_date} {label}")

        updated = SlotCounter.objects.filter(pk=counter.pk, count__lt=limit).update(
            count=F("count") + 1,
            label=label,
            updated_at=timezone.now(),
        )
        if not updated:
            logger.info(f"Slot {pickup_date} {label} is full (limit {limit})")
            raise SlotFullError(
                pickup_date=pickup_date.isoformat(),
                pickup_time_label=label,
                limit=limit,
            )

        counter.refresh_from_db()
        return counter

    @staticmethod
    def used_capacity(pickup_date: date, start_minute: int) -> int:
        return (
            SlotCounter.objects.filter(pickup_date=pickup_date, pickup_start_minute=start_minute)
            .values_list("count", flat=True)
            .first()
        ) or 0


@dataclass(frozen=True)
class SlotAvailability:
    slot: PickupSlot
    pickup_date: date
    pickup_start_minute: int
    used: int
    is_closed: bool

    @property
    def remaining(self) -> int:
        return max(0, self.slot.limit - self.used)

    @property
    def is_full(self) -> bool:
        return is_slot_full(self.used, self.slot.limit)

    @property
    def is_available(self) -> bool:
        return not (self.is_full or self.is_closed)

    @property
    def capacity_label(self) -> str:
        return f"Capacity: {self.used}/{self.slot.limit}"


class SlotAvailabilityService:
    """Slots currently on offer, annotated with how many orders each already holds."""

    @staticmethod
    def offered_slots(now: Optional[datetime] = None) -> Tuple[datetime, List[PickupSlot]]:
        """Generate the slots for local `now` and apply opening hours."""
        hours = BusinessHoursService()
        local_now = hours.local_now(now)
        policy = slot_settings.policy

        slots = generate_slots(
            local_now,
            policy.prep_buffer_minutes,
            policy.slot_minutes,
            policy.window_hours,
            policy.slot_limit,
        )
        return local_now, hours.filter_slots(slots, local_now.date())

    @staticmethod
    def used_counts(keys: List[Tuple[date, int]]) -> Dict[Tuple[date, int], int]:
        """
        Orders per (pickup date, start minute), counted from the public capacity
        entries written at admission.
        """
        if not keys:
            return {}
        PublicCapacityEntry = apps.get_model("orders", "PublicCapacityEntry")
        rows = (
            PublicCapacityEntry.objects.filter(
                pickup_date__in={d for d, _ in keys},
                pickup_start_minute__in={m for _, m in keys},
            )
            .values("pickup_date", "pickup_start_minute")
            .annotate(used=Count("order_id"))
        )
        return {(row["pickup_date"], row["pickup_start_minute"]): row["used"] for row in rows}

    @staticmethod
    def list_slots(now: Optional[datetime] = None) -> List[SlotAvailability]:
        local_now, slots = SlotAvailabilityService.offered_slots(now)
        policy = slot_settings.policy
        today = local_now.date()

        keys = [pickup_key(today, slot.start_minute) for slot in slots]
        used = SlotAvailabilityService.used_counts(keys)

        return [
            SlotAvailability(
                slot=slot,
                pickup_date=key[0],
                pickup_start_minute=key[1],
                used=used.get(key, 0),
                is_closed=is_slot_closed(slot.start_minute, local_now, policy.prep_buffer_minutes),
            )
            for slot, key in zip(slots, keys)
        ]
