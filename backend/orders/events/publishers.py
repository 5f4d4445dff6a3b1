from typing import Any, Dict
import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer
from django.db import transaction

logger = logging.getLogger(__name__)

BOARD_GROUP = "orders_board"


def tracking_group(code: str) -> str:
    return f"order_track_{code}"


class OrderEventPublisher:
    """
    Pushes order changes to websocket groups once the database transaction
    that made them has committed.
    """

    @staticmethod
    def order_placed(order, public: bool = True):
        """
        The board always hears about the order. The tracking group only does
        when the public projection was written.
        """
        from ..serializers import OrderSerializer, PublicOrderStatusSerializer

        board_payload = OrderSerializer(order).data
        public_payload = PublicOrderStatusSerializer(order).data
        logger.info(f"Publishing order_placed event for {order.code}")
        OrderEventPublisher._after_commit(BOARD_GROUP, "order_placed", board_payload)
        if public:
            OrderEventPublisher._after_commit(tracking_group(order.code), "status_changed", public_payload)

    @staticmethod
    def status_changed(order, old_status: str, public: bool = True):
        from ..serializers import OrderSerializer, PublicOrderStatusSerializer

        board_payload = dict(OrderSerializer(order).data, old_status=old_status)
        public_payload = PublicOrderStatusSerializer(order).data
        logger.info(f"Publishing status_changed event for {order.code}: {old_status} -> {order.status}")
        OrderEventPublisher._after_commit(BOARD_GROUP, "order_updated", board_payload)
        if public:
            OrderEventPublisher._after_commit(tracking_group(order.code), "status_changed", public_payload)

    @staticmethod
    def _after_commit(group: str, event: str, data: Dict[str, Any]):
        # Listeners must never see a change that is later rolled back
        if transaction.get_connection().in_atomic_block:
            transaction.on_commit(lambda: OrderEventPublisher._send(group, event, data))
        else:
            OrderEventPublisher._send(group, event, data)

    @staticmethod
    def _send(group: str, event: str, data: Dict[str, Any]):
        channel_layer = get_channel_layer()
        if channel_layer is None:
            logger.warning("No channel layer available for order notifications")
            return
        try:
            async_to_sync(channel_layer.group_send)(
                group,
                {"type": "order_event", "event": event, "data": data},
            )
        except Exception as e:
            # Websocket delivery is best effort; clients resync on reconnect
            logger.error(f"Error sending {event} to {group}: {e}")
