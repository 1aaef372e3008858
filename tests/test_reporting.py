"""
Tests for sales report aggregation.

Day and month boundaries are local (settings.TIME_ZONE, Asia/Jakarta in
tests, UTC+7).
"""

from datetime import datetime, timedelta
from decimal import Decimal
from unittest import mock
from zoneinfo import ZoneInfo

from django.db import DatabaseError

import pytest

from apps.core.exceptions import StorageError
from apps.reporting.services import SalesReportAggregator, SalesTotals, start_of_day, start_of_month
from apps.sales.models import Transaction

JAKARTA = ZoneInfo("Asia/Jakarta")


def record(total, created_at):
    return Transaction.objects.create(total_amount=Decimal(total), created_at=created_at)


class TestPeriodBoundaries:
    """Test local start-of-day and start-of-month."""

    def test_start_of_day_uses_local_time(self):
        # 20:00 UTC on 14 May is 03:00 on 15 May in Jakarta
        as_of = datetime(2024, 5, 14, 20, 0, tzinfo=ZoneInfo("UTC"))

        assert start_of_day(as_of) == datetime(2024, 5, 15, 0, 0, tzinfo=JAKARTA)

    def test_start_of_day_treats_naive_as_local(self):
        as_of = datetime(2024, 5, 15, 13, 0)

        assert start_of_day(as_of) == datetime(2024, 5, 15, 0, 0, tzinfo=JAKARTA)

    def test_start_of_month(self):
        as_of = datetime(2024, 5, 15, 13, 45, 10, tzinfo=JAKARTA)

        assert start_of_month(as_of) == datetime(2024, 5, 1, 0, 0, tzinfo=JAKARTA)


@pytest.mark.django_db
class TestSalesTotals:
    """Test daily and monthly totals."""

    as_of = datetime(2024, 5, 15, 12, 0, tzinfo=JAKARTA)

    def test_empty_ledger_returns_zero(self):
        aggregator = SalesReportAggregator()

        assert aggregator.daily_totals(self.as_of) == SalesTotals(total=Decimal("0.00"), count=0)
        assert aggregator.monthly_totals(self.as_of) == SalesTotals(total=Decimal("0.00"), count=0)

    def test_daily_totals_since_local_midnight(self):
        record("10.00", datetime(2024, 5, 15, 0, 0, tzinfo=JAKARTA))
        record("15.50", datetime(2024, 5, 15, 11, 0, tzinfo=JAKARTA))
        record("99.00", datetime(2024, 5, 14, 23, 59, tzinfo=JAKARTA))

        totals = SalesReportAggregator().daily_totals(self.as_of)

        assert totals.total == Decimal("25.50")
        assert totals.count == 2

    def test_totals_keep_two_decimal_places(self):
        record("20.00", datetime(2024, 5, 15, 9, 0, tzinfo=JAKARTA))
        aggregator = SalesReportAggregator()

        assert str(aggregator.daily_totals(self.as_of).total) == "20.00"
        assert str(aggregator.daily_totals(self.as_of + timedelta(days=1)).total) == "0.00"

    def test_naive_as_of_is_local(self):
        record("10.00", datetime(2024, 5, 15, 8, 0, tzinfo=JAKARTA))

        totals = SalesReportAggregator().daily_totals(datetime(2024, 5, 15, 12, 0))

        assert totals == SalesTotals(total=Decimal("10.00"), count=1)

    def test_monthly_totals_since_first_of_month(self):
        record("10.00", datetime(2024, 5, 1, 0, 0, tzinfo=JAKARTA))
        record("20.00", datetime(2024, 5, 15, 9, 0, tzinfo=JAKARTA))
        record("40.00", datetime(2024, 4, 30, 23, 0, tzinfo=JAKARTA))

        totals = SalesReportAggregator().monthly_totals(self.as_of)

        assert totals.total == Decimal("30.00")
        assert totals.count == 2

    def test_storage_failure_raises_storage_error(self):
        with mock.patch(
            "apps.reporting.services.Transaction.objects.using",
            side_effect=DatabaseError("down"),
        ):
            with pytest.raises(StorageError):
                SalesReportAggregator().daily_totals(self.as_of)


@pytest.mark.django_db
class TestRecentHistory:
    """Test recent transaction history."""

    def test_newest_first_and_limited(self):
        base = datetime(2024, 5, 1, 8, 0, tzinfo=JAKARTA)
        created = [record("1.00", base + timedelta(hours=i)) for i in range(5)]

        history = SalesReportAggregator().recent_history(3)

        assert [t.id for t in history] == [created[4].id, created[3].id, created[2].id]

    def test_summary(self):
        as_of = datetime(2024, 5, 15, 12, 0, tzinfo=JAKARTA)
        record("5.00", datetime(2024, 5, 15, 8, 0, tzinfo=JAKARTA))
        record("7.00", datetime(2024, 5, 2, 8, 0, tzinfo=JAKARTA))

        summary = SalesReportAggregator().summary(as_of, history_limit=1)

        assert summary.daily == SalesTotals(total=Decimal("5.00"), count=1)
        assert summary.monthly == SalesTotals(total=Decimal("12.00"), count=2)
        assert len(summary.history) == 1
        assert summary.history[0].total_amount == Decimal("5.00")
