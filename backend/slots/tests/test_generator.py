"""
Pickup slot generation tests.

The generator is pure, so these run without a database.
"""
from datetime import datetime

import pytest

from slots.generator import (
    PickupSlot,
    format_minutes,
    generate_slots,
    is_slot_closed,
    is_slot_full,
    is_slot_offered,
    slot_label,
)


class TestGenerateSlots:

    def test_first_slot_is_next_boundary_after_prep_buffer(self):
        """
        10:07 + 10 minutes buffer = 10:17, rounded up to the next 15 minute
        boundary gives a first slot at 10:30.
        """
        slots = generate_slots(datetime(2025, 6, 2, 10, 7), 10, 15, 2, 3)

        assert slots[0] == PickupSlot(label="10:30 - 10:45", start_minute=630, limit=3)

    def test_generation_is_deterministic(self):
        now = datetime(2025, 6, 2, 13, 52)

        assert generate_slots(now, 10, 15, 2, 3) == generate_slots(now, 10, 15, 2, 3)

    def test_window_covers_requested_hours_in_slot_steps(self):
        slots = generate_slots(datetime(2025, 6, 2, 10, 7), 10, 15, 2, 3)

        assert len(slots) == 8
        assert [s.start_minute for s in slots] == list(range(630, 750, 15))
        assert slots[-1].label == "12:15 - 12:30"
        assert all(s.limit == 3 for s in slots)

    def test_exact_boundary_is_not_pushed_to_next_slot(self):
        """now + buffer landing on a boundary keeps that boundary as the first slot"""
        slots = generate_slots(datetime(2025, 6, 2, 10, 20), 10, 15, 1, 3)

        assert slots[0].start_minute == 630

    def test_window_not_multiple_of_slot_size_keeps_full_width_last_slot(self):
        """
        A 1 hour window with 25 minute slots yields 3 slots; the last one runs
        past the hour but is still a full 25 minutes wide.
        """
        slots = generate_slots(datetime(2025, 6, 2, 9, 55), 5, 25, 1, 2)

        assert [s.start_minute for s in slots] == [600, 625, 650]
        assert slots[-1].label == "10:50 - 11:15"

    def test_labels_wrap_past_midnight(self):
        slots = generate_slots(datetime(2025, 6, 2, 23, 30), 10, 15, 1, 3)

        assert slots[0].start_minute == 1425
        assert slots[0].label == "23:45 - 00:00"
        assert slots[1].start_minute == 1440
        assert slots[1].label == "00:00 - 00:15"

    def test_zero_window_yields_no_slots(self):
        assert generate_slots(datetime(2025, 6, 2, 10, 7), 10, 15, 0, 3) == []

    def test_invalid_slot_size_is_rejected(self):
        with pytest.raises(ValueError):
            generate_slots(datetime(2025, 6, 2, 10, 7), 10, 0, 2, 3)


class TestSlotPredicates:

    def test_format_minutes(self):
        assert format_minutes(0) == "00:00"
        assert format_minutes(630) == "10:30"
        assert format_minutes(1445) == "00:05"

    def test_slot_label(self):
        assert slot_label(630, 15) == "10:30 - 10:45"

    def test_slot_closed_when_start_inside_prep_buffer(self):
        """At 10:25 with a 10 minute buffer, the 10:30 slot is closed and 10:45 is not"""
        now = datetime(2025, 6, 2, 10, 25)

        assert is_slot_closed(630, now, 10) is True
        assert is_slot_closed(645, now, 10) is False

    def test_slot_start_equal_to_buffer_edge_is_open(self):
        assert is_slot_closed(630, datetime(2025, 6, 2, 10, 20), 10) is False

    def test_full_and_closed_are_independent(self):
        now = datetime(2025, 6, 2, 10, 7)

        assert is_slot_full(3, 3) is True
        assert is_slot_full(2, 3) is False
        assert is_slot_closed(630, now, 10) is False

    def test_offered_requires_alignment_and_window(self):
        now = datetime(2025, 6, 2, 10, 7)

        assert is_slot_offered(630, now, 10, 15, 2) is True
        assert is_slot_offered(735, now, 10, 15, 2) is True
        assert is_slot_offered(750, now, 10, 15, 2) is False
        assert is_slot_offered(632, now, 10, 15, 2) is False
        assert is_slot_offered(615, now, 10, 15, 2) is False
