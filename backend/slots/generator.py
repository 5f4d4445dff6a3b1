"""
Pickup slot generation.

Slots are derived from the wall clock on every call and never stored. A slot
computed a minute ago may already be closed, so callers regenerate the list for
every display refresh and every admission check.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import List

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True)
class PickupSlot:
    label: str
    start_minute: int
    limit: int

    def as_dict(self) -> dict:
        return {"label": self.label, "start_minute": self.start_minute, "limit": self.limit}


def minute_of_day(now: datetime) -> int:
    return now.hour * 60 + now.minute


def format_minutes(minute: int) -> str:
    """Render minutes-since-midnight as HH:MM, wrapping hours at 24."""
    hours, minutes = divmod(minute, 60)
    return f"{hours % 24:02d}:{minutes:02d}"


def slot_label(start_minute: int, slot_size_minutes: int) -> str:
    return f"{format_minutes(start_minute)} - {format_minutes(start_minute + slot_size_minutes)}"


def first_slot_start(now: datetime, prep_buffer_minutes: int, slot_size_minutes: int) -> int:
    """Smallest multiple of the slot size that is not before now + prep buffer."""
    earliest = minute_of_day(now) + prep_buffer_minutes
    return -(-earliest // slot_size_minutes) * slot_size_minutes


def generate_slots(
    now: datetime,
    prep_buffer_minutes: int,
    slot_size_minutes: int,
    window_hours: int,
    per_slot_limit: int,
) -> List[PickupSlot]:
    """
    Return the orderable pickup slots for `now`, in start order.

    The window may run a little past `window_hours` when it is not a multiple of
    the slot size: every slot is a full `slot_size_minutes` wide.
    """
    if slot_size_minutes <= 0:
        raise ValueError("slot_size_minutes must be positive")
    if prep_buffer_minutes < 0 or window_hours < 0:
        raise ValueError("prep_buffer_minutes and window_hours cannot be negative")

    start = first_slot_start(now, prep_buffer_minutes, slot_size_minutes)
    end = start + window_hours * 60

    return [
        PickupSlot(label=slot_label(t, slot_size_minutes), start_minute=t, limit=per_slot_limit)
        for t in range(start, end, slot_size_minutes)
    ]


def is_slot_closed(start_minute: int, now: datetime, prep_buffer_minutes: int) -> bool:
    """A slot is closed for new orders once its start is less than prep buffer away."""
    return start_minute < minute_of_day(now) + prep_buffer_minutes


def is_slot_full(used: int, limit: int) -> bool:
    return used >= limit


def is_slot_offered(start_minute: int, now: datetime, prep_buffer_minutes: int, slot_size_minutes: int, window_hours: int) -> bool:
    """Whether `start_minute` is one of the slots generate_slots would return for `now`."""
    if slot_size_minutes <= 0 or start_minute % slot_size_minutes:
        return False
    start = first_slot_start(now, prep_buffer_minutes, slot_size_minutes)
    return start <= start_minute < start + window_hours * 60
