"""
Sales reporting over admitted orders.

Orders are attributed to their pickup date. Revenue is the sum of order
totals as computed at admission.
"""
from datetime import date
from decimal import Decimal
from typing import Any, Dict
import csv
import io
import logging

from django.core.cache import cache
from django.db.models import Count, Sum, Value
from django.db.models.functions import Coalesce
from django.utils import timezone

from orders.models import Order, OrderItem

logger = logging.getLogger(__name__)


class SalesReportService:
    CACHE_TIMEOUT = 120  # 2 minutes

    @staticmethod
    def generate_sales_report(start_date: date, end_date: date, use_cache: bool = True) -> Dict[str, Any]:
        """
        Order count, revenue, per-day and per-product breakdowns for pickup
        dates in [start_date, end_date].
        """
        cache_key = f"sales_report_{start_date.isoformat()}_{end_date.isoformat()}"
        if use_cache:
            cached = cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Sales report cache hit for {start_date} - {end_date}")
                return cached

        orders = Order.objects.filter(pickup_date__gte=start_date, pickup_date__lte=end_date)

        totals = orders.aggregate(
            total_orders=Count("id"),
            total_revenue=Coalesce(Sum("total"), Value(Decimal("0.00"))),
        )
        total_orders = totals["total_orders"]
        total_revenue = totals["total_revenue"]
        average = (total_revenue / total_orders) if total_orders else Decimal("0.00")

        by_day = [
            {
                "date": row["pickup_date"].isoformat(),
                "orders": row["orders"],
                "revenue": float(row["revenue"]),
            }
            for row in orders.values("pickup_date")
            .annotate(orders=Count("id"), revenue=Sum("total"))
            .order_by("pickup_date")
        ]

        by_status = {
            row["status"]: row["orders"]
            for row in orders.values("status").annotate(orders=Count("id")).order_by("status")
        }

        # Items keep their own name so deleted products still show up
        by_product = [
            {
                "name": row["name"],
                "quantity": row["quantity"],
                "revenue": float(row["revenue"]),
            }
            for row in OrderItem.objects.filter(order__in=orders)
            .values("name")
            .annotate(quantity=Count("id"), revenue=Sum("price"))
            .order_by("-revenue", "name")
        ]

        report = {
            "generated_at": timezone.now().isoformat(),
            "date_range": {"start": start_date.isoformat(), "end": end_date.isoformat()},
            "total_orders": total_orders,
            "total_revenue": float(total_revenue),
            "average_order_value": float(Decimal(average).quantize(Decimal("0.01"))),
            "orders_by_status": by_status,
            "sales_by_day": by_day,
            "top_products": by_product,
        }

        cache.set(cache_key, report, SalesReportService.CACHE_TIMEOUT)
        logger.info(f"Generated sales report {start_date} - {end_date}: {total_orders} orders, {total_revenue} revenue")
        return report

    @staticmethod
    def export_sales_to_csv(report_data: Dict[str, Any]) -> bytes:
        """Export sales report to CSV format."""
        output = io.StringIO()
        writer = csv.writer(output)

        date_range = report_data.get("date_range", {})
        writer.writerow(["Sales Report"])
        writer.writerow(["Generated:", report_data.get("generated_at", timezone.now().isoformat())])
        writer.writerow([f"Date Range: {date_range.get('start', '')} to {date_range.get('end', '')}"])
        writer.writerow([])

        writer.writerow(["Summary"])
        writer.writerow(["Total Orders", report_data.get("total_orders", 0)])
        writer.writerow(["Total Revenue", f"{report_data.get('total_revenue', 0):.2f}"])
        writer.writerow(["Average Order Value", f"{report_data.get('average_order_value', 0):.2f}"])
        writer.writerow([])

        writer.writerow(["Sales by Day"])
        writer.writerow(["Date", "Orders", "Revenue"])
        for row in report_data.get("sales_by_day", []):
            writer.writerow([row["date"], row["orders"], f"{row['revenue']:.2f}"])
        writer.writerow([])

        writer.writerow(["Products"])
        writer.writerow(["Product", "Quantity", "Revenue"])
        for row in report_data.get("top_products", []):
            writer.writerow([row["name"], row["quantity"], f"{row['revenue']:.2f}"])

        csv_bytes = output.getvalue().encode("utf-8")
        output.close()
        return csv_bytes
