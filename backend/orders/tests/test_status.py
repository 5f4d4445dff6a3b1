"""
Order status transition tests.
"""
import logging
import uuid
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from orders.exceptions import InvalidStatusError, OrderNotFoundError
from orders.models import Order, OrderStatus, PublicOrderStatus
from orders.services import OrderStatusService, OrderTrackingService
from users.authorization import AuthorizationError


@pytest.mark.django_db
class TestSetStatus:

    def test_status_fans_out_to_public_projection(self, placed_order, staff_auth):
        change = OrderStatusService.set_status(
            placed_order.id, placed_order.code, OrderStatus.IN_PROGRESS, staff_auth
        )

        assert change.previous_status == OrderStatus.NEW
        assert change.warnings == []
        placed_order.refresh_from_db()
        assert placed_order.status == OrderStatus.IN_PROGRESS
        assert PublicOrderStatus.objects.get(code=placed_order.code).status == OrderStatus.IN_PROGRESS

    def test_any_transition_is_allowed(self, placed_order, staff_auth):
        """Staff may jump straight to Ready and back again"""
        for target in (OrderStatus.READY, OrderStatus.NEW, OrderStatus.READY, OrderStatus.IN_PROGRESS):
            OrderStatusService.set_status(placed_order.id, placed_order.code, target, staff_auth)
            assert OrderTrackingService.lookup(placed_order.code).status == target

    def test_code_is_case_insensitive(self, placed_order, staff_auth):
        change = OrderStatusService.set_status(
            str(placed_order.id), placed_order.code.lower(), OrderStatus.READY, staff_auth
        )

        assert change.order.status == OrderStatus.READY

    def test_requires_staff(self, placed_order, anonymous_auth):
        with pytest.raises(AuthorizationError):
            OrderStatusService.set_status(placed_order.id, placed_order.code, OrderStatus.READY, anonymous_auth)
        with pytest.raises(AuthorizationError):
            OrderStatusService.set_status(placed_order.id, placed_order.code, OrderStatus.READY, None)

        placed_order.refresh_from_db()
        assert placed_order.status == OrderStatus.NEW

    def test_unknown_status(self, placed_order, staff_auth):
        with pytest.raises(InvalidStatusError):
            OrderStatusService.set_status(placed_order.id, placed_order.code, 'COLLECTED', staff_auth)

    def test_unknown_order(self, placed_order, staff_auth):
        with pytest.raises(OrderNotFoundError):
            OrderStatusService.set_status(uuid.uuid4(), placed_order.code, OrderStatus.READY, staff_auth)
        with pytest.raises(OrderNotFoundError):
            OrderStatusService.set_status('not-a-uuid', placed_order.code, OrderStatus.READY, staff_auth)

    def test_code_must_match_order(self, placed_order, staff_auth):
        with pytest.raises(OrderNotFoundError):
            OrderStatusService.set_status(placed_order.id, 'ZZZZZZ', OrderStatus.READY, staff_auth)

        assert Order.objects.get(pk=placed_order.id).status == OrderStatus.NEW

    def test_projection_failure_keeps_order_update(self, placed_order, staff_auth, caplog):
        with patch.object(
            PublicOrderStatus.objects, 'update_or_create', side_effect=DatabaseError('projection down')
        ):
            with caplog.at_level(logging.ERROR, logger='orders.alerts'):
                change = OrderStatusService.set_status(
                    placed_order.id, placed_order.code, OrderStatus.READY, staff_auth
                )

        assert change.warnings == ['public_status_not_updated']
        assert Order.objects.get(pk=placed_order.id).status == OrderStatus.READY
        assert PublicOrderStatus.objects.get(code=placed_order.code).status == OrderStatus.NEW
        assert any(placed_order.code in r.getMessage() for r in caplog.records)

    def test_missing_projection_is_recreated(self, placed_order, staff_auth):
        PublicOrderStatus.objects.filter(code=placed_order.code).delete()

        OrderStatusService.set_status(placed_order.id, placed_order.code, OrderStatus.IN_PROGRESS, staff_auth)

        assert PublicOrderStatus.objects.get(code=placed_order.code).status == OrderStatus.IN_PROGRESS

    def test_events_are_published_after_commit(self, placed_order, staff_auth, django_capture_on_commit_callbacks):
        with patch('orders.events.publishers.OrderEventPublisher._send') as send:
            with django_capture_on_commit_callbacks(execute=True):
                OrderStatusService.set_status(placed_order.id, placed_order.code, OrderStatus.READY, staff_auth)

        board, tracking = send.call_args_list
        assert board.args[:2] == ('orders_board', 'order_updated')
        assert board.args[2]['old_status'] == OrderStatus.NEW
        assert board.args[2]['status'] == OrderStatus.READY
        assert tracking.args[:2] == (f'order_track_{placed_order.code}', 'status_changed')
        assert 'items' not in tracking.args[2]
        assert 'total' not in tracking.args[2]

    def test_tracking_group_skipped_when_projection_fails(
        self, placed_order, staff_auth, django_capture_on_commit_callbacks
    ):
        with patch('orders.events.publishers.OrderEventPublisher._send') as send, \
                patch.object(PublicOrderStatus.objects, 'update_or_create', side_effect=DatabaseError('projection down')):
            with django_capture_on_commit_callbacks(execute=True):
                OrderStatusService.set_status(placed_order.id, placed_order.code, OrderStatus.READY, staff_auth)

        assert [c.args[:2] for c in send.call_args_list] == [('orders_board', 'order_updated')]

    def test_no_events_when_rejected(self, placed_order, staff_auth, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            with pytest.raises(OrderNotFoundError):
                OrderStatusService.set_status(placed_order.id, 'ZZZZZZ', OrderStatus.READY, staff_auth)

        assert callbacks == []


@pytest.mark.django_db
class TestTrackingLookup:

    def test_lookup_returns_public_projection(self, placed_order):
        public = OrderTrackingService.lookup(placed_order.code)

        assert public.code == placed_order.code
        assert public.status == OrderStatus.NEW
        assert public.pickup_time_label == '10:30 - 10:45'

    def test_lookup_normalises_code(self, placed_order):
        assert OrderTrackingService.lookup(f"  {placed_order.code.lower()} ").code == placed_order.code

    @pytest.mark.parametrize('code', ['', None, 'ABC', 'ABCDEFG', 'ABCDE0', 'ZZZZZZ'])
    def test_unknown_or_malformed_code(self, placed_order, code):
        with pytest.raises(OrderNotFoundError):
            OrderTrackingService.lookup(code)
