from dataclasses import dataclass, field
from typing import List, Optional
import logging
import uuid

from django.db import DatabaseError, transaction
from django.utils import timezone

from users.authorization import AuthorizationContext, require_staff
from ..events.publishers import OrderEventPublisher
from ..exceptions import InvalidStatusError, OrderNotFoundError
from ..models import Order, OrderStatus, PublicOrderStatus
from .code_service import normalize_tracking_code

logger = logging.getLogger(__name__)
alert_logger = logging.getLogger("orders.alerts")

WARNING_PUBLIC_STATUS_STALE = "public_status_not_updated"


@dataclass
class StatusChange:
    order: Order
    previous_status: str
    warnings: List[str] = field(default_factory=list)


class OrderStatusService:

    @staticmethod
    def set_status(order_id, code: str, new_status: str, auth: Optional[AuthorizationContext]) -> StatusChange:
        """
        Move an order to any status and mirror it onto the public projection.

        Every transition between New, In progress and Ready is allowed. The order
        update always stands; if the public projection cannot be written the
        failure goes to the alert log and comes back as a warning.
        """
        require_staff(auth)

        if new_status not in OrderStatus.values:
            raise InvalidStatusError(f"'{new_status}' is not a valid order status.", status=new_status)

        try:
            order_pk = uuid.UUID(str(order_id))
        except ValueError:
            raise OrderNotFoundError()

        with transaction.atomic():
            order = Order.objects.select_for_update().filter(pk=order_pk).first()
            if order is None or order.code != normalize_tracking_code(code):
                raise OrderNotFoundError()

            previous_status = order.status
            order.status = new_status
            order.save(update_fields=["status", "updated_at"])

            warnings = OrderStatusService._sync_public_status(order)
            OrderEventPublisher.status_changed(order, previous_status, public=not warnings)

        logger.info(f"Order {order.code} status {previous_status} -> {new_status} by user {auth.user_id}")
        return StatusChange(order=order, previous_status=previous_status, warnings=warnings)

    @staticmethod
    def _sync_public_status(order: Order) -> List[str]:
        try:
            with transaction.atomic():
                PublicOrderStatus.objects.update_or_create(
                    code=order.code,
                    defaults={
                        "status": order.status,
                        "pickup_time_label": order.pickup_time_label,
                        "pickup_date": order.pickup_date,
                        "updated_at": timezone.now(),
                    },
                )
        except DatabaseError as e:
            alert_logger.error(f"Public status for order {order.code} is stale ({order.status} not written): {e}")
            return [WARNING_PUBLIC_STATUS_STALE]
        return []
