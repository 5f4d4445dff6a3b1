"""
Order API integration tests: public placement and tracking, staff board.

Placement goes through the real clock, so these tests pick a slot from the
live slot listing rather than hard-coding one.
"""
from decimal import Decimal

import pytest

from orders.models import Order, OrderStatus, PublicOrderStatus
from orders.services import OrderStatusService


def offered_slot(client, index=1):
    slots = client.get('/api/slots/').data['slots']
    slot = slots[index]
    return {'label': slot['label'], 'start_minute': slot['start_minute']}


@pytest.mark.django_db
class TestPlaceOrderEndpoint:

    def test_anonymous_customer_places_order(self, api_client, product, salad_product):
        payload = {
            'pickup_slot': offered_slot(api_client),
            'cart': [
                {'product_id': product.id},
                {'product_id': salad_product.id, 'salads': ['Cabbage', 'Carrot', 'Tomato', 'Beetroot']},
            ],
            'total': '34.90',
        }

        response = api_client.post('/api/orders/place/', payload, format='json')

        assert response.status_code == 201
        assert Decimal(response.data['total']) == Decimal('34.90')
        assert response.data['status'] == OrderStatus.NEW
        assert response.data['warnings'] == []
        assert len(response.data['code']) == 6
        assert Order.objects.filter(code=response.data['code']).exists()

    def test_tampered_total_is_replaced(self, api_client, product):
        payload = {
            'pickup_slot': offered_slot(api_client),
            'cart': [{'product_id': product.id}],
            'total': '0.01',
        }

        response = api_client.post('/api/orders/place/', payload, format='json')

        assert response.status_code == 201
        assert Decimal(response.data['total']) == Decimal('8.50')
        assert response.data['warnings'] == ['client_total_replaced']

    def test_float_total_does_not_block_order(self, api_client, product):
        payload = {
            'pickup_slot': offered_slot(api_client),
            'cart': [{'product_id': product.id}],
            'total': 8.500000000000002,
        }

        response = api_client.post('/api/orders/place/', payload, format='json')

        assert response.status_code == 201
        assert Decimal(response.data['total']) == Decimal('8.50')
        assert response.data['warnings'] == []

    @pytest.mark.parametrize('client_total', [9.100000000000001, 'not a number', {'amount': 8.5}])
    def test_unusable_total_is_replaced(self, api_client, product, client_total):
        payload = {
            'pickup_slot': offered_slot(api_client),
            'cart': [{'product_id': product.id}],
            'total': client_total,
        }

        response = api_client.post('/api/orders/place/', payload, format='json')

        assert response.status_code == 201
        assert Decimal(response.data['total']) == Decimal('8.50')
        assert response.data['warnings'] == ['client_total_replaced']
        assert Order.objects.filter(code=response.data['code']).exists()

    def test_empty_cart_error_payload(self, api_client):
        payload = {'pickup_slot': offered_slot(api_client), 'cart': []}

        response = api_client.post('/api/orders/place/', payload, format='json')

        assert response.status_code == 400
        assert response.data['error']['code'] == 'empty_cart'
        assert response.data['error']['kind'] == 'invalid-argument'

    def test_missing_slot(self, api_client, product):
        response = api_client.post(
            '/api/orders/place/', {'cart': [{'product_id': product.id}]}, format='json'
        )

        assert response.status_code == 400
        assert response.data['error']['code'] == 'invalid_slot'

    def test_inactive_product(self, api_client, inactive_product):
        payload = {'pickup_slot': offered_slot(api_client), 'cart': [{'product_id': inactive_product.id}]}

        response = api_client.post('/api/orders/place/', payload, format='json')

        assert response.status_code == 400
        assert response.data['error']['code'] == 'product_unavailable'

    def test_full_slot_is_conflict(self, api_client, settings, product):
        settings.PICKUP_SLOTS = {**settings.PICKUP_SLOTS, 'SLOT_LIMIT': 1}
        payload = {'pickup_slot': offered_slot(api_client), 'cart': [{'product_id': product.id}]}

        assert api_client.post('/api/orders/place/', payload, format='json').status_code == 201
        response = api_client.post('/api/orders/place/', payload, format='json')

        assert response.status_code == 409
        assert response.data['error']['code'] == 'slot_full'
        assert response.data['error']['kind'] == 'resource-exhausted'


@pytest.mark.django_db
class TestTrackEndpoint:

    def test_public_tracking_exposes_projection_only(self, api_client, placed_order):
        response = api_client.get(f'/api/track/{placed_order.code}/')

        assert response.status_code == 200
        assert response.data['code'] == placed_order.code
        assert response.data['status'] == OrderStatus.NEW
        assert response.data['pickup_time_label'] == '10:30 - 10:45'
        assert 'items' not in response.data
        assert 'total' not in response.data

    def test_unknown_code(self, api_client, db):
        response = api_client.get('/api/track/ZZZZZZ/')

        assert response.status_code == 404
        assert response.data['error']['code'] == 'not_found'


@pytest.mark.django_db
class TestOrderBoard:

    def test_board_requires_staff(self, api_client, placed_order):
        assert api_client.get('/api/orders/').status_code in (401, 403)

    def test_board_lists_orders_with_items(self, staff_api_client, placed_order):
        response = staff_api_client.get('/api/orders/')

        assert response.status_code == 200
        assert response.data['count'] == 1
        order = response.data['results'][0]
        assert order['code'] == placed_order.code
        assert order['items'][0]['display_name'] == 'Lemonade'
        assert order['is_open'] is True

    def test_open_only_filter(self, staff_api_client, staff_auth, placed_order, product, first_slot, fixed_now):
        from orders.services import OrderAdmissionService

        other = OrderAdmissionService.place_order(
            cart=[{'product_id': product.id}], pickup_slot=first_slot, now=fixed_now
        )
        OrderStatusService.set_status(other.order_id, other.code, OrderStatus.READY, staff_auth)

        response = staff_api_client.get('/api/orders/?open_only=true')

        assert [o['code'] for o in response.data['results']] == [placed_order.code]

    def test_status_filter(self, staff_api_client, staff_auth, placed_order):
        OrderStatusService.set_status(placed_order.id, placed_order.code, OrderStatus.IN_PROGRESS, staff_auth)

        assert staff_api_client.get('/api/orders/?status=NEW').data['count'] == 0
        assert staff_api_client.get('/api/orders/?status=IN_PROGRESS').data['count'] == 1

    def test_jwt_authenticated_board(self, jwt_client, placed_order):
        response = jwt_client.get('/api/orders/')

        assert response.status_code == 200
        assert response.data['count'] == 1


@pytest.mark.django_db
class TestStatusAction:

    def test_staff_updates_status(self, staff_api_client, placed_order):
        response = staff_api_client.post(
            f'/api/orders/{placed_order.id}/status/',
            {'code': placed_order.code, 'status': OrderStatus.READY},
            format='json',
        )

        assert response.status_code == 200
        assert response.data['status'] == OrderStatus.READY
        assert response.data['previous_status'] == OrderStatus.NEW
        assert response.data['warnings'] == []
        assert PublicOrderStatus.objects.get(code=placed_order.code).status == OrderStatus.READY

    def test_invalid_status_value(self, staff_api_client, placed_order):
        response = staff_api_client.post(
            f'/api/orders/{placed_order.id}/status/',
            {'code': placed_order.code, 'status': 'COLLECTED'},
            format='json',
        )

        assert response.status_code == 400

    def test_wrong_code_is_not_found(self, staff_api_client, placed_order):
        response = staff_api_client.post(
            f'/api/orders/{placed_order.id}/status/',
            {'code': 'ZZZZZZ', 'status': OrderStatus.READY},
            format='json',
        )

        assert response.status_code == 404

    def test_anonymous_cannot_update(self, api_client, placed_order):
        response = api_client.post(
            f'/api/orders/{placed_order.id}/status/',
            {'code': placed_order.code, 'status': OrderStatus.READY},
            format='json',
        )

        assert response.status_code in (401, 403)
        assert Order.objects.get(pk=placed_order.id).status == OrderStatus.NEW
