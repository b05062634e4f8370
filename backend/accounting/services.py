from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional
import logging
import time

from django.conf import settings
from django.db import IntegrityError, OperationalError, transaction
from django.db.models import Count, Sum
from django.db.models.functions import TruncDay, TruncMonth, TruncWeek
from django.utils import timezone

from business_hours.services import AccountingDay, AccountingDayResolver, BusinessHoursService
from orders.models import Order
from orders.services import OrderService

from .exceptions import AlreadyFinalized, NotCalculated, OrderFetchTimeout, OrderStoreUnavailable
from .models import DailySales

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


@dataclass(frozen=True)
class SalesTotals:
    total_orders: int = 0
    total_items: int = 0
    total_amount: Decimal = Decimal("0.00")
    tax_amount: Decimal = Decimal("0.00")


class DailySalesLedger:
    """
    Stores daily sales and enforces their lifecycle.

    absent -> draft (calculate) -> draft (recalculate) -> finalized (terminal).
    Every mutation locks the row for the duration of its transaction, so two
    writers of the same store and date are serialized.
    """

    @staticmethod
    def get(store_location_id, accounting_date: date) -> Optional[DailySales]:
        return (
            DailySales.objects
            .filter(store_location_id=store_location_id, accounting_date=accounting_date)
            .first()
        )

    @staticmethod
    def query(store_location_id, start_date: date, end_date: date):
        """Drafts and finalized records between two dates inclusive, ascending."""
        return (
            DailySales.objects
            .for_store(store_location_id)
            .between(start_date, end_date)
            .order_by("accounting_date")
        )

    @staticmethod
    def _get_locked(store_location_id, accounting_date: date) -> Optional[DailySales]:
        return (
            DailySales.objects
            .select_for_update()
            .filter(store_location_id=store_location_id, accounting_date=accounting_date)
            .first()
        )

    @classmethod
    def upsert_draft(
        cls,
        store_location_id,
        accounting_date: date,
        totals: SalesTotals,
        period: AccountingDay,
    ) -> DailySales:
        """
        Create the draft for a day or overwrite the existing draft wholesale.

        Raises AlreadyFinalized if the day is finalized.
        """
        values = {
            "total_orders": totals.total_orders,
            "total_items": totals.total_items,
            "total_amount": totals.total_amount,
            "tax_amount": totals.tax_amount,
            "period_start": period.period_start,
            "period_end": period.period_end,
        }

        with transaction.atomic():
            record = cls._get_locked(store_location_id, accounting_date)

            if record is None:
                try:
                    with transaction.atomic():
                        record = DailySales.objects.create(
                            store_location_id=store_location_id,
                            accounting_date=accounting_date,
                            **values,
                        )
                    logger.info(
                        f"Created draft daily sales for store {store_location_id} on {accounting_date}"
                    )
                    return record
                except IntegrityError:
                    # A concurrent writer inserted the row first; continue as an update
                    logger.info(
                        f"Daily sales for store {store_location_id} on {accounting_date} "
                        f"were created concurrently, updating instead"
                    )
                    record = cls._get_locked(store_location_id, accounting_date)

            if record.is_finalized:
                logger.warning(
                    f"Rejected recalculation of finalized daily sales for store "
                    f"{store_location_id} on {accounting_date}"
                )
                raise AlreadyFinalized(store_location_id, accounting_date)

            for field, value in values.items():
                setattr(record, field, value)
            record.save()

        logger.info(f"Updated draft daily sales for store {store_location_id} on {accounting_date}")
        return record

    @classmethod
    def finalize(cls, store_location_id, accounting_date: date) -> DailySales:
        """
        Lock a draft permanently.

        Raises NotCalculated when there is no record and AlreadyFinalized
        when the record is already final.
        """
        with transaction.atomic():
            record = cls._get_locked(store_location_id, accounting_date)

            if record is None:
                logger.warning(
                    f"Rejected finalize of uncalculated daily sales for store "
                    f"{store_location_id} on {accounting_date}"
                )
                raise NotCalculated(store_location_id, accounting_date)

            if record.is_finalized:
                logger.warning(
                    f"Rejected second finalize of daily sales for store "
                    f"{store_location_id} on {accounting_date}"
                )
                raise AlreadyFinalized(store_location_id, accounting_date)

            record.is_finalized = True
            record.finalized_at = timezone.now()
            record.save(update_fields=["is_finalized", "finalized_at", "updated_at"])

        logger.info(f"Finalized daily sales for store {store_location_id} on {accounting_date}")
        return record


class DailySalesAggregator:
    """Calculates the sales of one accounting day and stores them as a draft."""

    @classmethod
    def calculate(cls, store_location_id, accounting_date: date, timeout: Optional[float] = None) -> DailySales:
        """
        (Re)calculate a day.

        Business hours are read fresh for every call. A finalized day is
        rejected before any order is read. If reading the orders fails or
        runs out of time nothing is written.
        """
        hours = BusinessHoursService.get_for_store(store_location_id)
        period = AccountingDayResolver.resolve_period(hours, accounting_date)

        existing = DailySalesLedger.get(store_location_id, accounting_date)
        if existing is not None and existing.is_finalized:
            logger.warning(
                f"Skipping calculation of finalized daily sales for store "
                f"{store_location_id} on {accounting_date}"
            )
            raise AlreadyFinalized(store_location_id, accounting_date)

        orders = cls.fetch_orders(period, timeout=timeout)
        totals = cls.compute_totals(orders)

        record = DailySalesLedger.upsert_draft(store_location_id, accounting_date, totals, period)
        logger.info(
            f"Calculated daily sales for store {store_location_id} on {accounting_date}: "
            f"{totals.total_orders} orders, {totals.total_amount} total"
        )
        return record

    @staticmethod
    def fetch_orders(period: AccountingDay, timeout: Optional[float] = None) -> List[Order]:
        """
        Billable orders created in ``[period_start, period_end)``, ascending by id.

        The deadline is checked before the query and after every row.
        """
        if timeout is None:
            timeout = settings.DAILY_SALES_FETCH_TIMEOUT_SECONDS
        deadline = time.monotonic() + timeout

        def check_deadline():
            if time.monotonic() >= deadline:
                logger.warning(
                    f"Order fetch for store {period.store_location_id} on {period.date} "
                    f"timed out after {timeout}s"
                )
                raise OrderFetchTimeout(period.store_location_id, period.date, timeout)

        check_deadline()
        orders = []
        try:
            queryset = OrderService.billable_orders_for_period(
                period.store_location_id, period.period_start, period.period_end
            )
            for order in queryset.iterator(chunk_size=500):
                orders.append(order)
                check_deadline()
        except OperationalError as e:
            logger.error(
                f"Order store unavailable for store {period.store_location_id} on {period.date}: {e}",
                exc_info=True
            )
            raise OrderStoreUnavailable(period.store_location_id, period.date) from e

        return orders

    @staticmethod
    def compute_totals(orders: Iterable[Order]) -> SalesTotals:
        """
        Reduce orders to daily totals in ascending id order.

        Cancelled and voided orders are skipped. ``total_items`` uses the
        annotated item count when present.
        """
        total_orders = 0
        total_items = 0
        total_amount = Decimal("0.00")
        tax_amount = Decimal("0.00")

        for order in sorted(orders, key=lambda o: o.id):
            if order.status in Order.NON_BILLABLE_STATUSES:
                continue

            if hasattr(order, "total_items"):
                items = order.total_items or 0
            else:
                items = sum(item.quantity for item in order.items.all())

            total_orders += 1
            total_items += items
            total_amount += order.grand_total
            tax_amount += order.tax_total

        return SalesTotals(
            total_orders=total_orders,
            total_items=total_items,
            total_amount=total_amount.quantize(CENT),
            tax_amount=tax_amount.quantize(CENT),
        )

    @classmethod
    def calculate_current(cls, store_location_id, timeout: Optional[float] = None) -> DailySales:
        """Calculate the accounting day that is in progress right now."""
        hours = BusinessHoursService.get_for_store(store_location_id)
        accounting_date = AccountingDayResolver.current_accounting_date(hours)
        return cls.calculate(store_location_id, accounting_date, timeout=timeout)


class SalesSummaryService:
    """Totals over stored daily sales grouped by day, week or month."""

    GROUP_BY_CHOICES = ("day", "week", "month")

    @classmethod
    def summarize(cls, store_location_id, start_date: date, end_date: date, group_by: str = "day"):
        """
        Returns a list of dicts ordered by period. ``period`` is the date of
        the day, the Monday of the week or the first day of the month.
        """
        if group_by not in cls.GROUP_BY_CHOICES:
            raise ValueError(f"group_by must be one of {', '.join(cls.GROUP_BY_CHOICES)}")

        queryset = DailySalesLedger.query(store_location_id, start_date, end_date)

        if group_by == "week":
            queryset = queryset.annotate(period=TruncWeek("accounting_date"))
        elif group_by == "month":
            queryset = queryset.annotate(period=TruncMonth("accounting_date"))
        else:
            queryset = queryset.annotate(period=TruncDay("accounting_date"))

        rows = (
            queryset
            .order_by()
            .values("period")
            .annotate(
                days=Count("id"),
                total_orders=Sum("total_orders"),
                total_items=Sum("total_items"),
                total_amount=Sum("total_amount"),
                tax_amount=Sum("tax_amount"),
            )
            .order_by("period")
        )

        summary = []
        for row in rows:
            total_amount = row["total_amount"] or Decimal("0.00")
            summary.append({
                "period": row["period"],
                "days": row["days"],
                "total_orders": row["total_orders"] or 0,
                "total_items": row["total_items"] or 0,
                "total_amount": total_amount,
                "tax_amount": row["tax_amount"] or Decimal("0.00"),
                "average_daily_amount": (total_amount / row["days"]).quantize(CENT),
            })
        return summary
