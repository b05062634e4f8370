from django.db import models
from django.core.exceptions import ValidationError
import zoneinfo


# === CHOICES ===

class TimezoneChoices(models.TextChoices):
    """Common timezone choices for business operations"""
    UTC = "UTC", "UTC (Coordinated Universal Time)"

    # Japan first: the ordering product ships for Japanese restaurants
    ASIA_TOKYO = "Asia/Tokyo", "Japan Standard Time"
    ASIA_SEOUL = "Asia/Seoul", "Korea Standard Time"
    ASIA_SHANGHAI = "Asia/Shanghai", "China Standard Time"
    ASIA_SINGAPORE = "Asia/Singapore", "Singapore Time"

    # US Timezones
    US_EASTERN = "America/New_York", "Eastern Time (US & Canada)"
    US_CENTRAL = "America/Chicago", "Central Time (US & Canada)"
    US_MOUNTAIN = "America/Denver", "Mountain Time (US & Canada)"
    US_PACIFIC = "America/Los_Angeles", "Pacific Time (US & Canada)"
    US_HAWAII = "Pacific/Honolulu", "Hawaii Time (US)"

    # European Timezones
    UK_LONDON = "Europe/London", "Greenwich Mean Time (UK)"
    EUROPE_PARIS = "Europe/Paris", "Central European Time"
    EUROPE_BERLIN = "Europe/Berlin", "Central European Time (Germany)"

    # Other Common Timezones
    AUSTRALIA_SYDNEY = "Australia/Sydney", "Australian Eastern Time"


# === CORE BUSINESS MODELS ===


class StoreLocation(models.Model):
    """
    A physical store. Every order, business hours profile and daily sales
    record belongs to exactly one location.

    The timezone is fixed per store and is the reference for converting order
    timestamps into store-local wall-clock time.
    """

    name = models.CharField(
        max_length=100,
        help_text="Location name (e.g., 'Shibuya', 'Umeda')"
    )
    slug = models.SlugField(
        max_length=100,
        unique=True,
        blank=True,
        help_text="URL-friendly identifier for this location"
    )
    timezone = models.CharField(
        max_length=50,
        choices=TimezoneChoices.choices,
        default=TimezoneChoices.ASIA_TOKYO,
        help_text="This location's timezone. Used for business hours and accounting days."
    )
    is_active = models.BooleanField(
        default=True,
        help_text="Inactive locations are skipped by scheduled sales calculation"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Store Location"
        verbose_name_plural = "Store Locations"
        ordering = ["name"]

    def __str__(self):
        return self.name

    def clean(self):
        try:
            zoneinfo.ZoneInfo(self.timezone)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError):
            raise ValidationError({"timezone": f"Unknown timezone '{self.timezone}'"})

    def save(self, *args, **kwargs):
        """Auto-generate slug from name if not provided"""
        if not self.slug and self.name:
            from django.utils.text import slugify
            base_slug = slugify(self.name, allow_unicode=True) or "store"
            slug = base_slug
            counter = 1

            while StoreLocation.objects.filter(slug=slug).exclude(pk=self.pk).exists():
                slug = f"{base_slug}-{counter}"
                counter += 1

            self.slug = slug

        super().save(*args, **kwargs)
