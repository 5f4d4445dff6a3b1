from datetime import date, time

import pytest
from django.conf import settings as django_settings

from business_hours.models import BusinessHoursProfile
from core_backend.tests.fixtures import local_datetime
from orders.services import OrderAdmissionService
from slots.services import SlotAvailabilityService


@pytest.mark.django_db
class TestSlotAvailabilityService:

    def test_slots_are_annotated_with_used_capacity(self, product, first_slot, fixed_now):
        OrderAdmissionService.place_order(
            cart=[{"product_id": product.id}], pickup_slot=first_slot, now=fixed_now
        )

        slots = SlotAvailabilityService.list_slots(now=fixed_now)

        first = slots[0]
        assert first.slot.label == "10:30 - 10:45"
        assert first.pickup_date == date(2025, 6, 2)
        assert first.used == 1
        assert first.remaining == 2
        assert first.capacity_label == "Capacity: 1/3"
        assert first.is_available is True
        assert all(s.used == 0 for s in slots[1:])

    def test_full_slot_is_flagged_but_not_closed(self, settings, product, first_slot, fixed_now):
        settings.PICKUP_SLOTS = {**settings.PICKUP_SLOTS, "SLOT_LIMIT": 1}
        OrderAdmissionService.place_order(
            cart=[{"product_id": product.id}], pickup_slot=first_slot, now=fixed_now
        )

        first = SlotAvailabilityService.list_slots(now=fixed_now)[0]

        assert first.is_full is True
        assert first.is_closed is False
        assert first.is_available is False

    def test_business_hours_drop_slots_outside_opening_time(self, fixed_now):
        """With a counter closing at 11:00, only the 10:30 and 10:45 slots remain"""
        BusinessHoursProfile.objects.create(
            name='Short day',
            timezone=django_settings.TIME_ZONE,
            opening_time=time(7, 0),
            closing_time=time(11, 0),
            is_default=True,
        )

        slots = SlotAvailabilityService.list_slots(now=fixed_now)

        assert [s.slot.label for s in slots] == ["10:30 - 10:45", "10:45 - 11:00"]

    def test_late_evening_slots_belong_to_next_day(self):
        now = local_datetime(2025, 6, 2, 23, 30)

        slots = SlotAvailabilityService.list_slots(now=now)

        assert slots[0].pickup_date == date(2025, 6, 2)
        assert slots[1].slot.start_minute == 1440
        assert slots[1].pickup_date == date(2025, 6, 3)
        assert slots[1].pickup_start_minute == 0


@pytest.mark.django_db
class TestSlotListEndpoint:

    def test_public_listing(self, api_client):
        response = api_client.get('/api/slots/')

        assert response.status_code == 200
        assert response.data['slot_minutes'] == 15
        assert len(response.data['slots']) == 8
        slot = response.data['slots'][0]
        for key in ('label', 'start_minute', 'limit', 'used', 'remaining', 'is_full', 'is_closed', 'is_available'):
            assert key in slot
        assert slot['used'] == 0
        assert slot['is_available'] is True

    def test_ledger_view_requires_staff(self, api_client, staff_api_client):
        assert api_client.get('/api/slots/counters/').status_code in (401, 403)
        assert staff_api_client.get('/api/slots/counters/').status_code == 200
