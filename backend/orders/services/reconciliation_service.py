from dataclasses import dataclass
from datetime import date
from typing import Optional
import logging

from django.db import transaction
from django.utils import timezone

from ..models import Order, PublicCapacityEntry, PublicOrderStatus

logger = logging.getLogger(__name__)
alert_logger = logging.getLogger("orders.alerts")


@dataclass
class ReconciliationReport:
    orders_checked: int = 0
    statuses_created: int = 0
    statuses_refreshed: int = 0
    capacity_entries_created: int = 0
    orphaned_entries_removed: int = 0

    @property
    def repairs(self) -> int:
        return (
            self.statuses_created
            + self.statuses_refreshed
            + self.capacity_entries_created
            + self.orphaned_entries_removed
        )


class ProjectionReconciliationService:
    """Rebuilds public projections that drifted from the orders they mirror."""

    @staticmethod
    @transaction.atomic
    def reconcile(pickup_date: Optional[date] = None, dry_run: bool = False) -> ReconciliationReport:
        report = ReconciliationReport()

        orders = Order.objects.all()
        entries = PublicCapacityEntry.objects.all()
        if pickup_date is not None:
            orders = orders.filter(pickup_date=pickup_date)
            entries = entries.filter(pickup_date=pickup_date)

        statuses = {
            s.code: s
            for s in PublicOrderStatus.objects.filter(code__in=orders.values("code"))
        }
        entry_ids = set(entries.values_list("order_id", flat=True))

        for order in orders.iterator():
            report.orders_checked += 1

            public = statuses.get(order.code)
            if public is None:
                report.statuses_created += 1
                alert_logger.warning(f"Public status missing for order {order.code}")
                if not dry_run:
                    PublicOrderStatus.objects.create(
                        code=order.code,
                        status=order.status,
                        pickup_time_label=order.pickup_time_label,
                        pickup_date=order.pickup_date,
                        updated_at=timezone.now(),
                    )
            elif (
                public.status != order.status
                or public.pickup_time_label != order.pickup_time_label
                or public.pickup_date != order.pickup_date
            ):
                report.statuses_refreshed += 1
                alert_logger.warning(f"Public status for order {order.code} was stale ({public.status} != {order.status})")
                if not dry_run:
                    public.status = order.status
                    public.pickup_time_label = order.pickup_time_label
                    public.pickup_date = order.pickup_date
                    public.updated_at = timezone.now()
                    public.save()

            if order.id not in entry_ids:
                report.capacity_entries_created += 1
                alert_logger.warning(f"Capacity entry missing for order {order.code}")
                if not dry_run:
                    PublicCapacityEntry.objects.create(
                        order_id=order.id,
                        pickup_time_label=order.pickup_time_label,
                        pickup_start_minute=order.pickup_start_minute,
                        pickup_date=order.pickup_date,
                    )

        orphaned = entries.exclude(order_id__in=Order.objects.values("id"))
        report.orphaned_entries_removed = orphaned.count()
        if report.orphaned_entries_removed:
            alert_logger.warning(f"{report.orphaned_entries_removed} capacity entries have no order")
            if not dry_run:
                orphaned.delete()

        logger.info(
            f"Projection reconciliation{' (dry run)' if dry_run else ''}: "
            f"{report.orders_checked} orders checked, {report.repairs} repairs"
        )
        return report
