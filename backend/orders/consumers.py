import json
import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer

from .events.publishers import BOARD_GROUP, tracking_group
from .exceptions import OrderNotFoundError
from .models import Order, OrderStatus
from .serializers import OrderSerializer, PublicOrderStatusSerializer
from .services import OrderTrackingService

logger = logging.getLogger(__name__)


class OrderEventConsumer(AsyncWebsocketConsumer):
    """
    Relays `order_event` group messages to the client and answers pings.

    Not routed on its own. Subclasses set `group_name` while connecting and
    implement send_snapshot(), which is also what a `refresh` action re-sends.
    """

    group_name = None

    async def disconnect(self, close_code):
        if self.group_name:
            await self.channel_layer.group_discard(self.group_name, self.channel_name)
            logger.info(f"{self.__class__.__name__} left {self.group_name} (code={close_code})")

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data or "{}")
        except json.JSONDecodeError:
            await self.send_error("Invalid JSON format")
            return

        action = data.get("action")
        if action == "ping":
            await self.send(text_data=json.dumps({"type": "pong"}))
        elif action == "refresh":
            await self.send_snapshot()
        else:
            await self.send_error(f"Unknown action: {action}")

    async def order_event(self, event):
        await self.send(text_data=json.dumps({"type": event["event"], "data": event["data"]}))

    async def send_error(self, message):
        await self.send(text_data=json.dumps({"type": "error", "message": message}))

    async def send_snapshot(self):
        """Send the current state the subclass streams updates for."""
        raise NotImplementedError(f"{self.__class__.__name__} must implement send_snapshot()")


class OrderBoardConsumer(OrderEventConsumer):
    """
    Live order list for counter staff. Sends the open orders on connect, then
    every placement and status change.
    """

    group_name = BOARD_GROUP

    async def connect(self):
        user = self.scope.get("user")
        if not (user and user.is_authenticated and user.is_counter_staff):
            logger.warning("OrderBoardConsumer: rejected unauthenticated or non-staff connection")
            await self.close(code=4403)
            return

        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        await self.send_snapshot()
        logger.info(f"OrderBoardConsumer: {user.email} connected")

    async def send_snapshot(self):
        orders = await self.get_open_orders()
        await self.send(text_data=json.dumps({"type": "snapshot", "data": orders}))

    @database_sync_to_async
    def get_open_orders(self):
        queryset = (
            Order.objects.exclude(status=OrderStatus.READY)
            .prefetch_related("items")
            .order_by("pickup_date", "pickup_start_minute", "created_at")
        )
        return OrderSerializer(queryset, many=True).data


class OrderTrackingConsumer(OrderEventConsumer):
    """Public status feed for one tracking code."""

    async def connect(self):
        code = self.scope["url_route"]["kwargs"]["code"]
        try:
            self.public_status = await database_sync_to_async(OrderTrackingService.lookup)(code)
        except OrderNotFoundError:
            logger.info(f"OrderTrackingConsumer: unknown code {code}, closing")
            await self.close(code=4404)
            return

        self.group_name = tracking_group(self.public_status.code)
        await self.channel_layer.group_add(self.group_name, self.channel_name)
        await self.accept()
        await self.send_snapshot()

    async def send_snapshot(self):
        data = await self.get_public_status()
        await self.send(text_data=json.dumps({"type": "snapshot", "data": data}))

    @database_sync_to_async
    def get_public_status(self):
        self.public_status.refresh_from_db()
        return PublicOrderStatusSerializer(self.public_status).data
