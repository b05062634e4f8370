from dataclasses import dataclass
from datetime import datetime, date, time, timedelta
from typing import List, Optional, Union
import logging

import pytz
from django.conf import settings
from django.core.cache import cache
from django.db import transaction
from django.utils import timezone

from settings.models import TimezoneChoices

from .exceptions import InvalidBusinessHours, NoBusinessHoursConfigured
from .models import BusinessHoursProfile
from .time_of_day import TimeOfDay

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = TimezoneChoices.ASIA_TOKYO.value

TimeInput = Union[str, TimeOfDay]


def is_next_day_operation(open_time: TimeOfDay, close_time: TimeOfDay) -> bool:
    """True when the store closes on the calendar day after it opens."""
    return close_time.hour >= 24 or close_time.same_day_minutes < open_time.same_day_minutes


@dataclass(frozen=True)
class BusinessHours:
    """
    Validated open/close pair for one store.

    This is what gets cached and passed to the resolvers; the model stays in
    the database layer.
    """

    open_time: TimeOfDay
    close_time: TimeOfDay
    timezone: str = DEFAULT_TIMEZONE
    store_location_id: Optional[int] = None

    @property
    def is_next_day(self) -> bool:
        return is_next_day_operation(self.open_time, self.close_time)

    @property
    def tzinfo(self):
        return pytz.timezone(self.timezone)

    @property
    def display(self) -> str:
        return f"{self.open_time.normalize()} 〜 {self.close_time.normalize()}"

    def to_dict(self):
        return {
            'store_location_id': self.store_location_id,
            'open_time': str(self.open_time),
            'close_time': str(self.close_time),
            'is_next_day': self.is_next_day,
            'timezone': self.timezone,
            'display': self.display,
        }


class BusinessHoursService:
    """Validation, lookup and update of store business hours"""

    CACHE_KEY_PREFIX = 'business_hours_store'

    @staticmethod
    def validate(
        open_time: TimeInput,
        close_time: TimeInput,
        timezone: str = DEFAULT_TIMEZONE,
        store_location_id: Optional[int] = None,
    ) -> BusinessHours:
        """
        Parse and check an open/close pair.

        Raises InvalidTimeFormat for unparseable text and InvalidBusinessHours
        when open equals close, or when close is earlier than open without the
        24+ hour encoding ("02:00" instead of "26:00").
        """
        opening = TimeOfDay.parse(open_time)
        closing = TimeOfDay.parse(close_time)

        if opening == closing:
            raise InvalidBusinessHours(
                opening, closing,
                f"Opening and closing time are both {opening}"
            )

        if closing < opening and closing.hour < 24:
            raise InvalidBusinessHours(
                opening, closing,
                f"Closing time {closing} is before opening time {opening}. "
                f"Write closing times after midnight as 24:00-26:59"
            )

        return BusinessHours(
            open_time=opening,
            close_time=closing,
            timezone=timezone,
            store_location_id=store_location_id,
        )

    @classmethod
    def cache_key(cls, store_location_id) -> str:
        return f"{cls.CACHE_KEY_PREFIX}_{store_location_id}"

    @classmethod
    def get_for_store(cls, store_location_id, use_cache: bool = True) -> BusinessHours:
        """
        Current business hours of a store.

        The cached snapshot is dropped by the signal handlers whenever the
        profile or its store location is saved or deleted.
        """
        key = cls.cache_key(store_location_id)
        if use_cache:
            hours = cache.get(key)
            if hours is not None:
                return hours

        profile = (
            BusinessHoursProfile.objects
            .select_related('store_location')
            .filter(store_location_id=store_location_id, is_active=True)
            .first()
        )
        if profile is None:
            raise NoBusinessHoursConfigured(store_location_id)

        hours = profile.as_business_hours()
        cache.set(key, hours, settings.BUSINESS_HOURS_CACHE_TIMEOUT)
        return hours

    @classmethod
    def update_for_store(cls, store_location_id, open_time: TimeInput, close_time: TimeInput) -> BusinessHours:
        """
        Replace a store's business hours.

        Only accounting days resolved from now on see the new hours. Stored
        daily sales keep the period they were calculated with.
        """
        from settings.models import StoreLocation

        hours = cls.validate(open_time, close_time)

        with transaction.atomic():
            store_location = StoreLocation.objects.select_for_update().get(pk=store_location_id)
            profile, created = BusinessHoursProfile.objects.update_or_create(
                store_location=store_location,
                defaults={
                    'open_time': str(hours.open_time),
                    'close_time': str(hours.close_time),
                    'is_active': True,
                },
            )

        logger.info(
            f"{'Created' if created else 'Updated'} business hours for store "
            f"{store_location_id}: {profile.display}"
        )
        return profile.as_business_hours()

    @classmethod
    def clear_cache(cls, store_location_id):
        cache.delete(cls.cache_key(store_location_id))


@dataclass(frozen=True)
class AccountingDay:
    """
    One accounting day of a store: the half-open interval
    ``[period_start, period_end)`` that starts at the store's opening time.
    """

    store_location_id: Optional[int]
    date: date
    period_start: datetime
    period_end: datetime

    def contains(self, timestamp: datetime) -> bool:
        return self.period_start <= timestamp < self.period_end

    def to_dict(self):
        return {
            'store_location_id': self.store_location_id,
            'date': self.date.isoformat(),
            'period_start': self.period_start.isoformat(),
            'period_end': self.period_end.isoformat(),
        }


class AccountingDayResolver:
    """
    Maps instants to accounting dates and accounting dates to UTC-comparable
    periods, using the store's opening time as the day boundary.
    """

    @staticmethod
    def to_local(business_hours: BusinessHours, timestamp: datetime) -> datetime:
        """Store-local wall-clock time. Naive input is read as store-local."""
        tz = business_hours.tzinfo
        if timezone.is_naive(timestamp):
            return tz.localize(timestamp)
        return timestamp.astimezone(tz)

    @staticmethod
    def _localize(business_hours: BusinessHours, naive: datetime) -> datetime:
        tz = business_hours.tzinfo
        return tz.normalize(tz.localize(naive))

    @classmethod
    def resolve_accounting_date(cls, business_hours: BusinessHours, timestamp: datetime) -> date:
        """
        Accounting date of an instant.

        Local times at or after the opening time belong to that calendar
        date, earlier ones to the previous date. Subtracting the full opening
        offset gives the same answer and also handles openings written as
        24:00 or later.
        """
        local = cls.to_local(business_hours, timestamp)
        shifted = local.replace(tzinfo=None) - timedelta(minutes=business_hours.open_time.total_minutes)
        accounting_date = shifted.date()

        # Across a DST change the wall-clock shift can land one day off the
        # localized period; the period boundaries win.
        period = cls.resolve_period(business_hours, accounting_date)
        if local < period.period_start:
            accounting_date -= timedelta(days=1)
        elif local >= period.period_end:
            accounting_date += timedelta(days=1)
        return accounting_date

    @classmethod
    def resolve_period(cls, business_hours: BusinessHours, accounting_date: date) -> AccountingDay:
        """
        The period of an accounting date, from its opening time up to the
        next day's opening time.
        """
        open_time = business_hours.open_time
        start = datetime.combine(
            accounting_date + timedelta(days=open_time.day_offset), open_time.as_time()
        )
        end = start + timedelta(days=1)

        return AccountingDay(
            store_location_id=business_hours.store_location_id,
            date=accounting_date,
            period_start=cls._localize(business_hours, start),
            period_end=cls._localize(business_hours, end),
        )

    @classmethod
    def resolve(cls, business_hours: BusinessHours, timestamp: datetime) -> AccountingDay:
        return cls.resolve_period(
            business_hours, cls.resolve_accounting_date(business_hours, timestamp)
        )

    @classmethod
    def current_accounting_date(cls, business_hours: BusinessHours, now: Optional[datetime] = None) -> date:
        if now is None:
            now = timezone.now()
        return cls.resolve_accounting_date(business_hours, now)

    @staticmethod
    def accounting_dates_between(start_date: date, end_date: date) -> List[date]:
        """Every date from start_date to end_date inclusive."""
        if end_date < start_date:
            return []
        return [start_date + timedelta(days=offset) for offset in range((end_date - start_date).days + 1)]

    @classmethod
    def is_open(cls, business_hours: BusinessHours, timestamp: Optional[datetime] = None) -> bool:
        """
        Whether the store is open at an instant: between the opening and
        closing time of the accounting day the instant belongs to.
        """
        if timestamp is None:
            timestamp = timezone.now()

        timestamp = cls.to_local(business_hours, timestamp)
        day = cls.resolve(business_hours, timestamp)
        close_minutes = business_hours.close_time.total_minutes
        if close_minutes < business_hours.open_time.total_minutes:
            close_minutes += 24 * 60
        closes_at = cls._localize(
            business_hours,
            datetime.combine(day.date, time.min) + timedelta(minutes=close_minutes),
        )
        return day.period_start <= timestamp < closes_at
