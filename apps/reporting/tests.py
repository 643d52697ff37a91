"""
Tests for report period resolution.
"""

from datetime import datetime, timedelta
from datetime import timezone as dt_timezone
from zoneinfo import ZoneInfo

from django.test import SimpleTestCase
from django.utils import timezone

from apps.core.exceptions import InvalidParams
from apps.reporting.services import PERIODS, resolve_period


class ResolvePeriodTests(SimpleTestCase):
    """Test turning period names into datetime windows."""

    def setUp(self):
        self.now = datetime(2024, 3, 15, 12, 30, tzinfo=dt_timezone.utc)

    def test_rolling_periods_end_at_now(self):
        for period, days in [("last_7_days", 7), ("last_30_days", 30), ("last_90_days", 90)]:
            start, end = resolve_period(period, self.now)
            self.assertEqual(end, self.now)
            self.assertEqual(start, self.now - timedelta(days=days))

    def test_current_month_starts_at_midnight_on_the_first(self):
        with timezone.override(ZoneInfo("UTC")):
            start, end = resolve_period("current_month", self.now)

        self.assertEqual(end, self.now)
        self.assertEqual(start, datetime(2024, 3, 1, tzinfo=dt_timezone.utc))

    def test_current_month_uses_local_calendar(self):
        """Early UTC hours on the 1st still belong to the previous month locally."""
        now = datetime(2024, 3, 1, 2, 0, tzinfo=dt_timezone.utc)
        sao_paulo = ZoneInfo("America/Sao_Paulo")

        with timezone.override(sao_paulo):
            start, _ = resolve_period("current_month", now)

        self.assertEqual(start, datetime(2024, 2, 1, tzinfo=sao_paulo))

    def test_unknown_period_is_rejected(self):
        with self.assertRaises(InvalidParams):
            resolve_period("last_year", self.now)

    def test_every_period_resolves(self):
        for period in PERIODS:
            start, end = resolve_period(period, self.now)
            self.assertLess(start, end)
