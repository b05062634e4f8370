"""
Daily Sales Task and Command Tests

Celery tasks for background calculation and the calculate_daily_sales
management command.
"""

import pytest
from datetime import date
from decimal import Decimal
from io import StringIO
from unittest.mock import patch

from celery.exceptions import Retry
from django.core.management import CommandError, call_command

from accounting.exceptions import OrderStoreUnavailable
from accounting.models import DailySales
from accounting.services import DailySalesLedger
from accounting.tasks import calculate_daily_sales, calculate_previous_accounting_day
from core_backend.tests.fixtures import tokyo
from settings.models import StoreLocation


@pytest.mark.django_db
class TestCalculateDailySalesTask:
    """accounting.tasks.calculate_daily_sales"""

    def test_calculates_draft(self, evening_hours, store_location, order_factory):
        order_factory(store_location, tokyo(2024, 6, 12, 20, 0), grand_total='1100', tax_total='100')

        result = calculate_daily_sales(store_location.id, '2024-06-12')

        assert result['status'] == 'completed'
        assert result['total_orders'] == 1
        assert DailySalesLedger.get(store_location.id, date(2024, 6, 12)).total_amount == Decimal('1100.00')

    def test_finalized_day_is_skipped(self, evening_hours, store_location):
        calculate_daily_sales(store_location.id, '2024-06-12')
        DailySalesLedger.finalize(store_location.id, date(2024, 6, 12))

        result = calculate_daily_sales(store_location.id, '2024-06-12')

        assert result['status'] == 'skipped'

    def test_missing_business_hours_is_not_retried(self, store_location):
        with patch.object(calculate_daily_sales, 'retry') as retry:
            result = calculate_daily_sales(store_location.id, '2024-06-12')

        assert result['status'] == 'failed'
        retry.assert_not_called()

    def test_transient_failure_is_retried(self, evening_hours, store_location):
        error = OrderStoreUnavailable(store_location.id, date(2024, 6, 12))
        with patch('accounting.tasks.DailySalesAggregator.calculate', side_effect=error):
            with patch.object(calculate_daily_sales, 'retry', side_effect=Retry()) as retry:
                with pytest.raises(Retry):
                    calculate_daily_sales(store_location.id, '2024-06-12')

        retry.assert_called_once_with(exc=error)
        assert not DailySales.objects.exists()


@pytest.mark.django_db
class TestCalculatePreviousAccountingDay:
    """accounting.tasks.calculate_previous_accounting_day"""

    def test_queues_each_configured_store(self, evening_hours, store_location, other_store_location):
        StoreLocation.objects.create(name='Closed', is_active=False)

        with patch('business_hours.services.timezone.now', return_value=tokyo(2024, 6, 13, 6, 0)):
            with patch.object(calculate_daily_sales, 'delay') as delay:
                result = calculate_previous_accounting_day()

        # 06:00 on 06-13 is still the 06-12 accounting day, so 06-11 just ended
        delay.assert_called_once_with(store_location.id, '2024-06-11')
        assert result['count'] == 1


@pytest.mark.django_db
class TestCalculateDailySalesCommand:
    """manage.py calculate_daily_sales"""

    def test_calculate(self, evening_hours, store_location, order_factory):
        order_factory(store_location, tokyo(2024, 6, 12, 20, 0), grand_total='1100', tax_total='100')
        out = StringIO()

        call_command('calculate_daily_sales', '--store-id', str(store_location.id), '--date', '2024-06-12', stdout=out)

        assert 'Calculated 2024-06-12' in out.getvalue()
        assert '| 1100.00 |' in out.getvalue()
        assert '| 100.00 |' in out.getvalue()
        assert DailySalesLedger.get(store_location.id, date(2024, 6, 12)).is_finalized is False

    def test_calculate_and_finalize(self, evening_hours, store_location):
        out = StringIO()

        call_command(
            'calculate_daily_sales', '--store-id', str(store_location.id),
            '--date', '2024-06-12', '--finalize', stdout=out
        )

        assert 'Finalized 2024-06-12' in out.getvalue()
        assert DailySalesLedger.get(store_location.id, date(2024, 6, 12)).is_finalized is True

    def test_finalized_day(self, evening_hours, store_location):
        call_command('calculate_daily_sales', '--store-id', str(store_location.id), '--date', '2024-06-12',
                     '--finalize', stdout=StringIO())

        with pytest.raises(CommandError, match='already_finalized'):
            call_command('calculate_daily_sales', '--store-id', str(store_location.id), '--date', '2024-06-12',
                         stdout=StringIO())

    def test_invalid_date(self, evening_hours, store_location):
        with pytest.raises(CommandError):
            call_command('calculate_daily_sales', '--store-id', str(store_location.id), '--date', '2024-13-01')

    def test_unknown_store(self, db):
        with pytest.raises(CommandError):
            call_command('calculate_daily_sales', '--store-id', '999999')
