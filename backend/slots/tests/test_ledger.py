"""
Slot capacity ledger tests.

The ledger is the one place where a race is a correctness bug: two requests
for the last seat of a slot must never both get it.
"""
from datetime import date
from threading import Barrier, Thread

import pytest
from django.db import connection, transaction

from orders.models import Order, PublicCapacityEntry
from orders.services import OrderAdmissionService
from slots.exceptions import SlotFullError
from slots.models import SlotCounter
from slots.services import SlotCapacityLedger, pickup_key

PICKUP_DATE = date(2025, 6, 2)


@pytest.mark.django_db
class TestSlotCapacityLedger:

    def test_first_reservation_creates_counter(self):
        with transaction.atomic():
            counter = SlotCapacityLedger.reserve(PICKUP_DATE, 630, 3, "10:30 - 10:45")

        assert counter.count == 1
        assert counter.label == "10:30 - 10:45"
        assert SlotCounter.objects.count() == 1

    def test_reservations_increment_until_limit(self):
        for expected in (1, 2, 3):
            with transaction.atomic():
                counter = SlotCapacityLedger.reserve(PICKUP_DATE, 630, 3, "10:30 - 10:45")
            assert counter.count == expected

        with pytest.raises(SlotFullError) as exc_info:
            with transaction.atomic():
                SlotCapacityLedger.reserve(PICKUP_DATE, 630, 3, "10:30 - 10:45")

        assert exc_info.value.code == "slot_full"
        assert exc_info.value.kind == "resource-exhausted"
        assert SlotCapacityLedger.used_capacity(PICKUP_DATE, 630) == 3

    def test_keys_are_independent(self):
        """Same start minute on another day, or another slot on the same day, has its own count"""
        with transaction.atomic():
            SlotCapacityLedger.reserve(PICKUP_DATE, 630, 1, "10:30 - 10:45")
            SlotCapacityLedger.reserve(date(2025, 6, 3), 630, 1, "10:30 - 10:45")
            SlotCapacityLedger.reserve(PICKUP_DATE, 645, 1, "10:45 - 11:00")

        assert SlotCounter.objects.filter(count=1).count() == 3

    def test_zero_limit_is_always_full_and_writes_nothing(self):
        with pytest.raises(SlotFullError):
            with transaction.atomic():
                SlotCapacityLedger.reserve(PICKUP_DATE, 630, 0, "10:30 - 10:45")

        assert not SlotCounter.objects.exists()

    def test_used_capacity_of_untouched_slot_is_zero(self):
        assert SlotCapacityLedger.used_capacity(PICKUP_DATE, 630) == 0


@pytest.mark.django_db(transaction=True)
def test_reserve_requires_enclosing_transaction():
    with pytest.raises(RuntimeError):
        SlotCapacityLedger.reserve(PICKUP_DATE, 630, 3, "10:30 - 10:45")


def test_pickup_key_moves_late_slots_to_next_day():
    assert pickup_key(PICKUP_DATE, 630) == (PICKUP_DATE, 630)
    assert pickup_key(PICKUP_DATE, 1440) == (date(2025, 6, 3), 0)
    assert pickup_key(PICKUP_DATE, 1455) == (date(2025, 6, 3), 15)


@pytest.mark.django_db
class TestSequentialCapacity:

    def test_only_limit_orders_are_admitted(self, settings, product, first_slot, fixed_now):
        """
        Five customers try the same slot with a limit of three: three orders
        are admitted, two are rejected as full, and the counter stops at three.
        """
        settings.PICKUP_SLOTS = {**settings.PICKUP_SLOTS, "SLOT_LIMIT": 3}

        admitted, rejected = [], []
        for _ in range(5):
            try:
                admitted.append(
                    OrderAdmissionService.place_order(
                        cart=[{"product_id": product.id}],
                        pickup_slot=first_slot,
                        now=fixed_now,
                    )
                )
            except SlotFullError as e:
                rejected.append(e)

        assert len(admitted) == 3
        assert len(rejected) == 2
        assert SlotCounter.objects.get(pickup_date=PICKUP_DATE, pickup_start_minute=630).count == 3
        assert Order.objects.count() == 3
        assert PublicCapacityEntry.objects.count() == 3


@pytest.mark.skipif(
    connection.vendor != "postgresql",
    reason="Concurrent writers need row-level locking; SQLite serializes the whole database",
)
@pytest.mark.django_db(transaction=True)
class TestConcurrentCapacity:

    def test_concurrent_admissions_never_exceed_limit(self, settings, product, first_slot, fixed_now):
        """
        CRITICAL: six simultaneous admissions for a slot with limit three.

        Expected: exactly three succeed, three fail with slot_full, and the
        counter never goes past three.
        """
        settings.PICKUP_SLOTS = {**settings.PICKUP_SLOTS, "SLOT_LIMIT": 3}
        attempts = 6

        results = []
        full = []
        errors = []

        # Barrier ensures all threads start simultaneously
        barrier = Barrier(attempts)

        def attempt_admission(thread_id):
            try:
                # Reconnect to database in thread
                connection.close()
                connection.connect()

                barrier.wait()

                OrderAdmissionService.place_order(
                    cart=[{"product_id": product.id}],
                    pickup_slot=first_slot,
                    now=fixed_now,
                )
                results.append(thread_id)
            except SlotFullError:
                full.append(thread_id)
            except Exception as e:
                errors.append(f"thread_{thread_id}_unexpected: {e}")
            finally:
                connection.close()

        threads = [Thread(target=attempt_admission, args=(i,)) for i in range(attempts)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(results) == 3, f"Expected 3 admissions, got {len(results)}"
        assert len(full) == 3, f"Expected 3 slot_full rejections, got {len(full)}"
        assert SlotCounter.objects.get(pickup_date=PICKUP_DATE, pickup_start_minute=630).count == 3
        assert Order.objects.count() == 3
