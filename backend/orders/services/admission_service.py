"""
Order admission: turn a customer's cart and chosen pickup slot into an order.

The capacity reservation, the order and its items commit together or not at
all. The two public projections are written in a savepoint inside the same
transaction; if they fail the order still stands and the caller gets a warning.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional, Tuple
import logging
import time
import uuid

from django.db import DatabaseError, IntegrityError, OperationalError, transaction
from django.utils import timezone

from business_hours.services import BusinessHoursService
from products.pricing import CENT, ResolvedLine, is_well_formed_customization, validate_line
from products.services import ProductService
from slots.config import slot_settings
from slots.generator import is_slot_closed, is_slot_offered, slot_label
from slots.services import SlotCapacityLedger, pickup_key
from users.authorization import AuthorizationContext
from ..events.publishers import OrderEventPublisher
from ..exceptions import (
    AdmissionConflictError,
    EmptyCartError,
    InvalidCartLineError,
    InvalidSlotError,
    SlotClosedError,
    SlotNotOfferedError,
)
from ..models import Order, OrderItem, OrderStatus, PublicCapacityEntry, PublicOrderStatus
from .code_service import MAX_CODE_ATTEMPTS, generate_tracking_code

logger = logging.getLogger(__name__)
alert_logger = logging.getLogger("orders.alerts")

WARNING_CLIENT_TOTAL_REPLACED = "client_total_replaced"
WARNING_PROJECTION_FAILED = "public_projection_failed"


class TrackingCodeExhaustedError(IntegrityError):
    """Every sampled tracking code was already taken."""


@dataclass
class AdmissionResult:
    order_id: uuid.UUID
    code: str
    total: Decimal
    pickup_date: date
    pickup_time_label: str
    status: str = OrderStatus.NEW
    warnings: List[str] = field(default_factory=list)


class OrderAdmissionService:

    @staticmethod
    def place_order(
        cart,
        pickup_slot,
        auth: Optional[AuthorizationContext] = None,
        client_total=None,
        now: Optional[datetime] = None,
    ) -> AdmissionResult:
        """
        Validate and admit one order.

        Checks run in a fixed order and the first failure is raised: slot shape,
        empty cart, closed slot, slot not on offer, cart lines against the live
        catalog, and finally slot capacity. Line prices are always recomputed
        here; a client total is only compared, never trusted.
        """
        label, start_minute = OrderAdmissionService._parse_slot(pickup_slot)

        if not isinstance(cart, (list, tuple)) or len(cart) == 0:
            raise EmptyCartError()

        policy = slot_settings.policy
        hours = BusinessHoursService()
        local_now = hours.local_now(now)

        if is_slot_closed(start_minute, local_now, policy.prep_buffer_minutes):
            raise SlotClosedError(pickup_time_label=label, start_minute=start_minute)

        offered = is_slot_offered(
            start_minute,
            local_now,
            policy.prep_buffer_minutes,
            policy.slot_minutes,
            policy.window_hours,
        )
        if not offered or not hours.is_minute_open(start_minute, local_now.date()):
            raise SlotNotOfferedError(pickup_time_label=label, start_minute=start_minute)

        lines = OrderAdmissionService.resolve_cart(cart)
        total = sum((line.final_price for line in lines), Decimal("0.00")).quantize(CENT)

        warnings = []
        if client_total is not None and OrderAdmissionService._as_amount(client_total) != total:
            logger.warning(f"Client total {client_total} replaced by computed total {total}")
            warnings.append(WARNING_CLIENT_TOTAL_REPLACED)

        pickup_date, minute = pickup_key(local_now.date(), start_minute)
        canonical_label = slot_label(start_minute, policy.slot_minutes)

        attempts = policy.admission_max_retries
        for attempt in range(1, attempts + 1):
            try:
                with transaction.atomic():
                    order, projection_warnings = OrderAdmissionService._admit(
                        lines, total, pickup_date, minute, canonical_label, policy.slot_limit
                    )
                break
            except (OperationalError, IntegrityError) as e:
                if attempt == attempts:
                    logger.error(f"Admission for {pickup_date} {canonical_label} failed after {attempts} attempts: {e}")
                    raise AdmissionConflictError() from e
                delay = policy.admission_retry_backoff_seconds * (2 ** (attempt - 1))
                logger.warning(
                    f"Admission conflict on {pickup_date} {canonical_label} "
                    f"(attempt {attempt}/{attempts}), retrying in {delay:.3f}s: {e}"
                )
                time.sleep(delay)

        warnings.extend(projection_warnings)

        placed_by = f" by user {auth.user_id}" if auth and auth.user_id else ""
        logger.info(f"Admitted order {order.code} for {pickup_date} {canonical_label}, total {total}{placed_by}")

        return AdmissionResult(
            order_id=order.id,
            code=order.code,
            total=order.total,
            pickup_date=order.pickup_date,
            pickup_time_label=order.pickup_time_label,
            status=order.status,
            warnings=warnings,
        )

    @staticmethod
    def _parse_slot(pickup_slot) -> Tuple[str, int]:
        if not isinstance(pickup_slot, dict):
            raise InvalidSlotError()

        label = pickup_slot.get("label")
        start_minute = pickup_slot.get("start_minute")
        if not isinstance(label, str) or not label.strip():
            raise InvalidSlotError("Pickup slot label is missing.")
        if isinstance(start_minute, bool) or not isinstance(start_minute, int) or start_minute < 0:
            raise InvalidSlotError("Pickup slot start minute must be a non-negative integer.")
        return label.strip(), start_minute

    @staticmethod
    def _as_amount(value) -> Optional[Decimal]:
        try:
            return Decimal(str(value)).quantize(CENT)
        except (InvalidOperation, ValueError):
            return None

    @staticmethod
    def resolve_cart(cart) -> List[ResolvedLine]:
        """Price every cart line against the current catalog, raising on the first bad line."""
        parsed = []
        for index, line in enumerate(cart):
            if not isinstance(line, dict):
                raise InvalidCartLineError(line=index)
            product_id = line.get("product_id")
            if isinstance(product_id, bool) or not isinstance(product_id, int):
                raise InvalidCartLineError("Cart line is missing a product id.", line=index)
            salads = line.get("salads") or []
            selections = line.get("selections") or {}
            if not is_well_formed_customization(salads, selections):
                raise InvalidCartLineError("Cart line customisation is malformed.", line=index)
            parsed.append((product_id, salads, selections))

        snapshots = ProductService.get_snapshots(product_id for product_id, _, _ in parsed)
        return [
            validate_line(snapshots[product_id], salads, selections)
            for product_id, salads, selections in parsed
        ]

    @staticmethod
    def _admit(lines, total, pickup_date, start_minute, label, limit) -> Tuple[Order, List[str]]:
        SlotCapacityLedger.reserve(pickup_date, start_minute, limit, label)

        order = Order.objects.create(
            code=OrderAdmissionService._unused_code(),
            pickup_date=pickup_date,
            pickup_start_minute=start_minute,
            pickup_time_label=label,
            total=total,
            status=OrderStatus.NEW,
        )
        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                position=position,
                product_id=line.product_id,
                name=line.name,
                display_name=line.display_name,
                price=line.final_price,
                custom=line.as_order_item().get("custom"),
            )
            for position, line in enumerate(lines)
        ])

        warnings = OrderAdmissionService._write_public_projections(order)
        OrderEventPublisher.order_placed(order, public=not warnings)
        return order, warnings

    @staticmethod
    def _unused_code() -> str:
        # The unique constraint on Order.code still guards against a concurrent twin
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_tracking_code()
            if not Order.objects.filter(code=code).exists():
                return code
        raise TrackingCodeExhaustedError("Could not find an unused tracking code")

    @staticmethod
    def _write_public_projections(order: Order) -> List[str]:
        try:
            with transaction.atomic():
                PublicOrderStatus.objects.create(
                    code=order.code,
                    status=order.status,
                    pickup_time_label=order.pickup_time_label,
                    pickup_date=order.pickup_date,
                    updated_at=timezone.now(),
                )
                PublicCapacityEntry.objects.create(
                    order_id=order.id,
                    pickup_time_label=order.pickup_time_label,
                    pickup_start_minute=order.pickup_start_minute,
                    pickup_date=order.pickup_date,
                )
        except DatabaseError as e:
            alert_logger.error(
                f"Public projections for order {order.code} ({order.id}) were not written: {e}. "
                f"Run reconcile_public_projections to repair."
            )
            return [WARNING_PROJECTION_FAILED]
        return []
