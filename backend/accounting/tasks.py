from celery import shared_task
from datetime import datetime, timedelta
import logging

from business_hours.exceptions import BusinessHoursError
from business_hours.services import AccountingDayResolver, BusinessHoursService

from .exceptions import AlreadyFinalized, TransientAccountingError
from .services import DailySalesAggregator

logger = logging.getLogger(__name__)


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def calculate_daily_sales(self, store_location_id: int, date: str):
    """
    Calculate one store's daily sales in the background.

    Only transient failures (order fetch timeout, database unavailable) are
    retried. A finalized day is reported as skipped.
    """
    accounting_date = datetime.strptime(date, "%Y-%m-%d").date()

    try:
        record = DailySalesAggregator.calculate(store_location_id, accounting_date)
    except AlreadyFinalized:
        logger.info(
            f"Daily sales for store {store_location_id} on {date} already finalized, skipping"
        )
        return {"status": "skipped", "store_location_id": store_location_id, "date": date}
    except TransientAccountingError as exc:
        logger.warning(
            f"Transient failure calculating daily sales for store {store_location_id} on {date}: {exc}"
        )
        if self.request.retries < self.max_retries:
            logger.info(f"Retrying daily sales calculation in {self.default_retry_delay} seconds")
            raise self.retry(exc=exc)
        return {"status": "failed", "error": str(exc), "retries": self.request.retries}
    except BusinessHoursError as exc:
        logger.warning(f"Cannot calculate daily sales for store {store_location_id}: {exc}")
        return {"status": "failed", "error": str(exc), "retries": self.request.retries}

    return {
        "status": "completed",
        "store_location_id": store_location_id,
        "date": date,
        "daily_sales_id": record.id,
        "total_orders": record.total_orders,
        "total_amount": str(record.total_amount),
    }


@shared_task
def calculate_previous_accounting_day():
    """
    Queue a draft calculation of the accounting day that just ended, for
    every active store with business hours. Nothing is finalized here.
    """
    from settings.models import StoreLocation

    queued = []
    store_ids = StoreLocation.objects.filter(
        is_active=True, business_hours__is_active=True
    ).values_list("id", flat=True)

    for store_location_id in store_ids:
        try:
            hours = BusinessHoursService.get_for_store(store_location_id)
        except BusinessHoursError as exc:
            logger.warning(f"Skipping store {store_location_id}: {exc}")
            continue

        current = AccountingDayResolver.current_accounting_date(hours)
        previous = (current - timedelta(days=1)).isoformat()
        calculate_daily_sales.delay(store_location_id, previous)
        queued.append({"store_location_id": store_location_id, "date": previous})

    logger.info(f"Queued daily sales calculation for {len(queued)} stores")
    return {"status": "queued", "count": len(queued), "stores": queued}
