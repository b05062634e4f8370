from datetime import datetime
from django.core.management.base import BaseCommand, CommandError
from tabulate import tabulate

from accounting.exceptions import AccountingError
from accounting.services import DailySalesAggregator, DailySalesLedger
from business_hours.exceptions import BusinessHoursError
from settings.models import StoreLocation


class Command(BaseCommand):
    help = 'Calculate (and optionally finalize) the daily sales of a store for one accounting day'

    def add_arguments(self, parser):
        parser.add_argument(
            '--store-id',
            type=int,
            required=True,
            help='StoreLocation id',
        )
        parser.add_argument(
            '--date',
            type=str,
            help='Accounting date YYYY-MM-DD (default: current accounting day)',
        )
        parser.add_argument(
            '--finalize',
            action='store_true',
            help='Finalize the day after calculating it',
        )

    def handle(self, *args, **options):
        store_id = options['store_id']
        if not StoreLocation.objects.filter(pk=store_id).exists():
            raise CommandError(f"Store location {store_id} does not exist")

        try:
            if options['date']:
                try:
                    accounting_date = datetime.strptime(options['date'], '%Y-%m-%d').date()
                except ValueError:
                    raise CommandError(f"Invalid date '{options['date']}', expected YYYY-MM-DD")
                record = DailySalesAggregator.calculate(store_id, accounting_date)
            else:
                record = DailySalesAggregator.calculate_current(store_id)

            self.stdout.write(self.style.SUCCESS(
                f"Calculated {record.accounting_date} for store {store_id}: "
                f"{record.total_orders} orders, {record.total_items} items, "
                f"total {record.total_amount}, tax {record.tax_amount}"
            ))
            self.print_record(record)

            if options['finalize']:
                record = DailySalesLedger.finalize(store_id, record.accounting_date)
                self.stdout.write(self.style.SUCCESS(
                    f"Finalized {record.accounting_date} at {record.finalized_at}"
                ))
        except (AccountingError, BusinessHoursError) as e:
            raise CommandError(f"{e.code}: {e}")

    def print_record(self, record):
        headers = ['Date', 'Period start', 'Period end', 'Orders', 'Items', 'Total', 'Tax', 'Status']
        rows = [[
            record.accounting_date,
            record.period_start.isoformat(),
            record.period_end.isoformat(),
            record.total_orders,
            record.total_items,
            f"{record.total_amount:.2f}",
            f"{record.tax_amount:.2f}",
            record.status,
        ]]
        # Money is pre-formatted; keep tabulate from reparsing it as numbers
        self.stdout.write(tabulate(rows, headers=headers, tablefmt='grid', disable_numparse=True))
