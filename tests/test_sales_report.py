"""
Tests for the sales aggregation report.
"""

from datetime import date, datetime, timedelta
from datetime import timezone as dt_timezone

import pytest

from apps.core.exceptions import InvalidParams, WithoutPermission
from apps.reporting.services import SalesReportService
from apps.sales.models import Order

NOW = datetime(2024, 3, 15, 12, 0, tzinfo=dt_timezone.utc)


@pytest.fixture(autouse=True)
def utc(settings):
    settings.TIME_ZONE = "UTC"


def make_order(total_price, total_cost_price, created_at, draft=False):
    return Order.objects.create(
        total_price=total_price,
        total_cost_price=total_cost_price,
        created_at=created_at,
        draft=draft,
    )


@pytest.mark.django_db
class TestOrdersReport:
    """Test SalesReportService.get_orders_report."""

    def test_report_arithmetic(self, operator_user):
        make_order(100, 60, NOW - timedelta(days=1))
        make_order(200, 120, NOW - timedelta(days=2))

        report = SalesReportService().get_orders_report(operator_user.pk, "last_7_days", now=NOW)

        assert report["orders_count"] == 2
        assert report["revenue"] == 300
        assert report["profit"] == 120
        assert report["margin"] == pytest.approx(40)
        assert report["average_revenue_per_order"] == pytest.approx(150)

    def test_drafts_are_excluded(self, operator_user):
        make_order(100, 60, NOW - timedelta(days=1))
        make_order(5000, 100, NOW - timedelta(days=1), draft=True)

        report = SalesReportService().get_orders_report(operator_user.pk, "last_7_days", now=NOW)

        assert report["orders_count"] == 1
        assert report["revenue"] == 100
        assert report["profit"] == 40
        assert len(report["orders"]) == 1

    def test_rolling_window_boundaries(self, operator_user):
        start = NOW - timedelta(days=7)
        make_order(10, 5, start)
        make_order(20, 5, NOW)
        make_order(40, 5, start - timedelta(seconds=1))
        make_order(80, 5, NOW - timedelta(days=12))
        make_order(160, 5, NOW + timedelta(seconds=1))

        report = SalesReportService().get_orders_report(operator_user.pk, "last_7_days", now=NOW)

        assert report["orders_count"] == 2
        assert report["revenue"] == 30

    def test_current_month(self, operator_user):
        make_order(100, 50, datetime(2024, 3, 1, 0, 0, tzinfo=dt_timezone.utc))
        make_order(300, 50, datetime(2024, 2, 29, 23, 59, tzinfo=dt_timezone.utc))

        report = SalesReportService().get_orders_report(operator_user.pk, "current_month", now=NOW)

        assert report["orders_count"] == 1
        assert report["revenue"] == 100

    def test_daily_series_is_grouped_and_sorted(self, operator_user):
        make_order(200, 120, datetime(2024, 3, 14, 15, 0, tzinfo=dt_timezone.utc))
        make_order(50, 10, datetime(2024, 3, 12, 9, 0, tzinfo=dt_timezone.utc))
        make_order(100, 60, datetime(2024, 3, 14, 10, 0, tzinfo=dt_timezone.utc))

        report = SalesReportService().get_orders_report(operator_user.pk, "last_7_days", now=NOW)

        assert report["orders"] == [
            {"date": date(2024, 3, 12), "total_price": 50, "total_cost_price": 10},
            {"date": date(2024, 3, 14), "total_price": 300, "total_cost_price": 180},
        ]
        assert report["margin"] == pytest.approx(160 / 350 * 100)

    def test_empty_period(self, operator_user):
        report = SalesReportService().get_orders_report(operator_user.pk, "last_30_days", now=NOW)

        assert report == {
            "orders_count": 0,
            "revenue": 0,
            "profit": 0,
            "margin": 0,
            "average_revenue_per_order": 0,
            "orders": [],
        }

    def test_zero_revenue_has_zero_margin(self, operator_user):
        make_order(0, 30, NOW - timedelta(days=1))

        report = SalesReportService().get_orders_report(operator_user.pk, "last_7_days", now=NOW)

        assert report["orders_count"] == 1
        assert report["profit"] == -30
        assert report["margin"] == 0
        assert report["average_revenue_per_order"] == 0

    def test_unknown_period(self, operator_user):
        with pytest.raises(InvalidParams):
            SalesReportService().get_orders_report(operator_user.pk, "last_year", now=NOW)

    def test_unknown_caller(self):
        with pytest.raises(WithoutPermission):
            SalesReportService().get_orders_report(None, "last_7_days", now=NOW)
