from django.db import models
from django.core.exceptions import ValidationError

from .exceptions import BusinessHoursError
from .time_of_day import TimeOfDay, validate_time_of_day


class BusinessHoursProfile(models.Model):
    """
    Opening and closing time of a single store.

    Times are stored as canonical "HH:MM" text because closing times past
    midnight are written as 24:00-26:59, which ``TimeField`` cannot hold.
    The next-day flag is always derived from the two times, never stored.
    """

    store_location = models.OneToOneField(
        'settings.StoreLocation',
        on_delete=models.CASCADE,
        related_name='business_hours',
        help_text='Store location this business hours profile belongs to'
    )
    open_time = models.CharField(
        max_length=5,
        validators=[validate_time_of_day],
        help_text='Opening time (HH:MM, 00:00-26:59). Starts the accounting day.'
    )
    close_time = models.CharField(
        max_length=5,
        validators=[validate_time_of_day],
        help_text='Closing time (HH:MM). Use 24:00-26:59 for times after midnight.'
    )
    is_active = models.BooleanField(
        default=True,
        help_text='Whether this profile is currently active'
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Business Hours Profile'
        verbose_name_plural = 'Business Hours Profiles'
        ordering = ['store_location__name']

    def __str__(self):
        return f"{self.store_location.name} - {self.display}"

    @property
    def opening(self) -> TimeOfDay:
        return TimeOfDay.parse(self.open_time)

    @property
    def closing(self) -> TimeOfDay:
        return TimeOfDay.parse(self.close_time)

    @property
    def is_next_day(self) -> bool:
        from .services import is_next_day_operation
        return is_next_day_operation(self.opening, self.closing)

    @property
    def timezone(self) -> str:
        return self.store_location.timezone

    @property
    def display(self) -> str:
        """Human readable range, e.g. "17:00 〜 翌02:00"."""
        return f"{self.opening.normalize()} 〜 {self.closing.normalize()}"

    def as_business_hours(self):
        """Immutable snapshot used by the resolvers and the cache."""
        from .services import BusinessHoursService
        return BusinessHoursService.validate(
            self.open_time,
            self.close_time,
            timezone=self.timezone,
            store_location_id=self.store_location_id,
        )

    def clean(self):
        super().clean()
        from .services import BusinessHoursService
        try:
            BusinessHoursService.validate(self.open_time, self.close_time)
        except BusinessHoursError as e:
            raise ValidationError(str(e), code=e.code)

    def save(self, *args, **kwargs):
        # Invalid pairs never reach the table, and "9:00" is stored as "09:00"
        from .services import BusinessHoursService
        hours = BusinessHoursService.validate(self.open_time, self.close_time)
        self.open_time = str(hours.open_time)
        self.close_time = str(hours.close_time)
        super().save(*args, **kwargs)
