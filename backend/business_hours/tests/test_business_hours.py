"""
Business Hours Tests

Validation of open/close pairs, the next-day flag, the stored profile and the
cached per-store lookup.
"""

import pytest
from django.core.cache import cache
from django.core.exceptions import ValidationError

from business_hours.exceptions import (
    InvalidBusinessHours,
    InvalidTimeFormat,
    NoBusinessHoursConfigured,
)
from business_hours.models import BusinessHoursProfile
from business_hours.services import BusinessHoursService, is_next_day_operation
from business_hours.time_of_day import TimeOfDay


class TestBusinessHoursValidation:
    """BusinessHoursService.validate"""

    def test_valid_same_day_hours(self):
        hours = BusinessHoursService.validate("09:00", "22:00")
        assert str(hours.open_time) == "09:00"
        assert str(hours.close_time) == "22:00"
        assert hours.is_next_day is False
        assert hours.timezone == "Asia/Tokyo"

    def test_valid_overnight_hours(self):
        hours = BusinessHoursService.validate("17:00", "26:00")
        assert hours.is_next_day is True
        assert hours.display == "17:00 〜 翌02:00"

    def test_accepts_time_of_day_values(self):
        hours = BusinessHoursService.validate(TimeOfDay(11, 0), TimeOfDay(23, 0))
        assert hours.open_time == TimeOfDay(11, 0)

    def test_rejects_equal_times(self):
        with pytest.raises(InvalidBusinessHours) as exc_info:
            BusinessHoursService.validate("10:00", "10:00")
        assert exc_info.value.code == "invalid_business_hours"

    def test_rejects_implicit_overnight(self):
        """Closing after midnight must be written as 24:00 or later"""
        with pytest.raises(InvalidBusinessHours):
            BusinessHoursService.validate("17:00", "02:00")

    def test_rejects_bad_time_text(self):
        with pytest.raises(InvalidTimeFormat):
            BusinessHoursService.validate("25:00:00", "26:00")
        with pytest.raises(InvalidTimeFormat):
            BusinessHoursService.validate("17:00", "27:00")


class TestIsNextDay:
    """Truth table of the next-day flag"""

    @pytest.mark.parametrize("open_time,close_time,expected", [
        ("09:00", "17:00", False),
        ("09:00", "23:59", False),
        ("17:00", "24:00", True),
        ("17:00", "26:00", True),
        ("00:00", "24:00", True),
        ("25:00", "26:00", True),
        ("22:00", "01:00", True),
    ])
    def test_truth_table(self, open_time, close_time, expected):
        assert is_next_day_operation(TimeOfDay.parse(open_time), TimeOfDay.parse(close_time)) is expected


@pytest.mark.django_db
class TestBusinessHoursProfile:
    """Stored profile"""

    def test_save_stores_canonical_text(self, store_location):
        profile = BusinessHoursProfile.objects.create(
            store_location=store_location, open_time="9:00", close_time="17:30"
        )
        profile.refresh_from_db()
        assert profile.open_time == "09:00"
        assert profile.is_next_day is False

    def test_save_rejects_invalid_pair(self, store_location):
        with pytest.raises(InvalidBusinessHours):
            BusinessHoursProfile.objects.create(
                store_location=store_location, open_time="18:00", close_time="03:00"
            )
        assert not BusinessHoursProfile.objects.exists()

    def test_full_clean_reports_validation_error(self, store_location):
        profile = BusinessHoursProfile(
            store_location=store_location, open_time="18:00", close_time="18:00"
        )
        with pytest.raises(ValidationError):
            profile.full_clean()

    def test_derived_fields(self, evening_hours):
        assert evening_hours.is_next_day is True
        assert evening_hours.timezone == "Asia/Tokyo"
        assert evening_hours.display == "17:00 〜 翌02:00"
        assert str(evening_hours) == "Shibuya - 17:00 〜 翌02:00"

    def test_as_business_hours_snapshot(self, evening_hours, store_location):
        hours = evening_hours.as_business_hours()
        assert hours.store_location_id == store_location.id
        assert hours.open_time == TimeOfDay(17, 0)
        assert hours.close_time == TimeOfDay(26, 0)


@pytest.mark.django_db
class TestBusinessHoursService:
    """Per-store lookup, update and cache invalidation"""

    def test_get_for_store(self, evening_hours, store_location):
        hours = BusinessHoursService.get_for_store(store_location.id)
        assert str(hours.open_time) == "17:00"
        assert hours.timezone == "Asia/Tokyo"

    def test_get_for_store_without_profile(self, store_location):
        with pytest.raises(NoBusinessHoursConfigured) as exc_info:
            BusinessHoursService.get_for_store(store_location.id)
        assert exc_info.value.store_location_id == store_location.id

    def test_inactive_profile_is_ignored(self, evening_hours, store_location):
        evening_hours.is_active = False
        evening_hours.save()
        with pytest.raises(NoBusinessHoursConfigured):
            BusinessHoursService.get_for_store(store_location.id)

    def test_lookup_is_cached(self, evening_hours, store_location):
        BusinessHoursService.get_for_store(store_location.id)
        assert cache.get(BusinessHoursService.cache_key(store_location.id)) is not None

    def test_saving_profile_invalidates_cache(self, evening_hours, store_location):
        BusinessHoursService.get_for_store(store_location.id)

        evening_hours.open_time = "18:00"
        evening_hours.save()

        assert cache.get(BusinessHoursService.cache_key(store_location.id)) is None
        assert str(BusinessHoursService.get_for_store(store_location.id).open_time) == "18:00"

    def test_changing_store_timezone_invalidates_cache(self, evening_hours, store_location):
        BusinessHoursService.get_for_store(store_location.id)

        store_location.timezone = "Asia/Seoul"
        store_location.save()

        assert BusinessHoursService.get_for_store(store_location.id).timezone == "Asia/Seoul"

    def test_deleting_profile_invalidates_cache(self, evening_hours, store_location):
        BusinessHoursService.get_for_store(store_location.id)
        evening_hours.delete()
        with pytest.raises(NoBusinessHoursConfigured):
            BusinessHoursService.get_for_store(store_location.id)

    def test_update_creates_profile(self, store_location):
        hours = BusinessHoursService.update_for_store(store_location.id, "11:00", "23:00")
        assert hours.store_location_id == store_location.id
        assert BusinessHoursProfile.objects.get(store_location=store_location).close_time == "23:00"

    def test_update_replaces_profile(self, evening_hours, store_location):
        BusinessHoursService.get_for_store(store_location.id)

        BusinessHoursService.update_for_store(store_location.id, "18:00", "25:30")

        hours = BusinessHoursService.get_for_store(store_location.id)
        assert str(hours.open_time) == "18:00"
        assert str(hours.close_time) == "25:30"
        assert BusinessHoursProfile.objects.filter(store_location=store_location).count() == 1

    def test_stale_copy_cached_before_commit_is_dropped(
        self, evening_hours, store_location, django_capture_on_commit_callbacks
    ):
        key = BusinessHoursService.cache_key(store_location.id)
        old_hours = BusinessHoursService.get_for_store(store_location.id)

        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            BusinessHoursService.update_for_store(store_location.id, "18:00", "25:30")
            # A concurrent reader that still saw the old row caches it again
            cache.set(key, old_hours)

        assert len(callbacks) >= 1
        assert cache.get(key) is None
        assert str(BusinessHoursService.get_for_store(store_location.id).open_time) == "18:00"

    def test_update_rejects_invalid_pair_and_keeps_old_hours(self, evening_hours, store_location):
        with pytest.raises(InvalidBusinessHours):
            BusinessHoursService.update_for_store(store_location.id, "18:00", "01:00")

        evening_hours.refresh_from_db()
        assert evening_hours.close_time == "26:00"
