"""
Sales reporting services.

- Period resolution (current month, last 7/30/90 days)
- Aggregation of non-draft orders into totals, margin and a per-day series
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from django.db.models import Count, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from apps.core.access import require_role
from apps.core.exceptions import InvalidParams
from apps.core.models import RoleLevel
from apps.sales.models import Order

logger = logging.getLogger(__name__)


CURRENT_MONTH = "current_month"
LAST_7_DAYS = "last_7_days"
LAST_30_DAYS = "last_30_days"
LAST_90_DAYS = "last_90_days"

# Rolling windows, in days
ROLLING_PERIODS = {
    LAST_7_DAYS: 7,
    LAST_30_DAYS: 30,
    LAST_90_DAYS: 90,
}

PERIODS = [CURRENT_MONTH, LAST_7_DAYS, LAST_30_DAYS, LAST_90_DAYS]


def resolve_period(period: str, now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Turn a period name into a (start, end) datetime window ending at ``now``.

    ``current_month`` starts at 00:00 on the first day of the month in the
    current timezone. Rolling periods start exactly N days before ``now``.

    Raises:
        InvalidParams: If the period name is unknown
    """
    if now is None:
        now = timezone.now()

    if period == CURRENT_MONTH:
        local_now = timezone.localtime(now)
        start = local_now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
        return start, now

    if period in ROLLING_PERIODS:
        return now - timedelta(days=ROLLING_PERIODS[period]), now

    raise InvalidParams(f"Unknown period {period!r}. Expected one of: {', '.join(PERIODS)}.")


class SalesReportService:
    """
    Aggregate committed sales over a reporting period.
    """

    def get_orders_report(self, caller_id, period: str, now: Optional[datetime] = None) -> Dict[str, Any]:
        """
        Summarize non-draft orders created inside the period.

        Args:
            caller_id: Id of the user requesting the report
            period: One of ``PERIODS``
            now: Reference time for the window (defaults to the current time)

        Returns:
            Dictionary with ``orders_count``, ``revenue``, ``profit``,
            ``margin`` (percent), ``average_revenue_per_order`` and ``orders``,
            a list of per-day totals sorted by date

        Raises:
            WithoutPermission: Unknown caller
            InvalidParams: Unknown period
        """
        require_role(caller_id, RoleLevel.OPERATOR)

        start, end = resolve_period(period, now)

        queryset = Order.objects.filter(
            draft=False,
            created_at__gte=start,
            created_at__lte=end,
        )

        totals = queryset.aggregate(
            orders_count=Count("id"),
            revenue=Sum("total_price"),
            cost=Sum("total_cost_price"),
        )

        orders_count = totals["orders_count"]
        revenue = totals["revenue"] or 0
        profit = revenue - (totals["cost"] or 0)

        margin = profit / revenue * 100 if revenue > 0 else 0
        average_revenue_per_order = revenue / orders_count if orders_count > 0 else 0

        daily = (
            queryset.annotate(date=TruncDate("created_at"))
            .values("date")
            .annotate(
                total_price=Sum("total_price"),
                total_cost_price=Sum("total_cost_price"),
            )
            .order_by("date")
        )

        logger.info(
            "Orders report for %s (%s to %s): %d orders, revenue %s",
            period,
            start,
            end,
            orders_count,
            revenue,
        )

        return {
            "orders_count": orders_count,
            "revenue": revenue,
            "profit": profit,
            "margin": margin,
            "average_revenue_per_order": average_revenue_per_order,
            "orders": [
                {
                    "date": row["date"],
                    "total_price": row["total_price"],
                    "total_cost_price": row["total_cost_price"],
                }
                for row in daily
            ],
        }
