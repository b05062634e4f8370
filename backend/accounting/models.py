from decimal import Decimal
from django.db import models
from django.utils.translation import gettext_lazy as _

from .exceptions import AlreadyFinalized


class DailySalesQuerySet(models.QuerySet):
    def for_store(self, store_location_id):
        return self.filter(store_location_id=store_location_id)

    def between(self, start_date, end_date):
        """Inclusive on both ends."""
        return self.filter(accounting_date__gte=start_date, accounting_date__lte=end_date)

    def drafts(self):
        return self.filter(is_finalized=False)

    def finalized(self):
        return self.filter(is_finalized=True)

    def _reject_finalized(self):
        finalized = self.filter(is_finalized=True).first()
        if finalized is not None:
            raise AlreadyFinalized(finalized.store_location_id, finalized.accounting_date)

    def update(self, **kwargs):
        self._reject_finalized()
        return super().update(**kwargs)

    def delete(self):
        self._reject_finalized()
        return super().delete()


class DailySales(models.Model):
    """
    Sales totals of one store for one accounting day.

    A row starts as a draft that every recalculation overwrites. Once
    finalized it is immutable and is never deleted.
    """

    store_location = models.ForeignKey(
        'settings.StoreLocation',
        on_delete=models.PROTECT,
        related_name='daily_sales',
    )
    accounting_date = models.DateField(
        help_text=_("Accounting date. The day starts at the store's opening time.")
    )

    total_orders = models.PositiveIntegerField(default=0)
    total_items = models.PositiveIntegerField(default=0)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    tax_amount = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    # Period the totals were calculated over, kept even if business hours change later
    period_start = models.DateTimeField()
    period_end = models.DateTimeField()

    is_finalized = models.BooleanField(default=False)
    finalized_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = DailySalesQuerySet.as_manager()

    class Meta:
        ordering = ["accounting_date"]
        verbose_name = _("Daily Sales")
        verbose_name_plural = _("Daily Sales")
        constraints = [
            models.UniqueConstraint(
                fields=["store_location", "accounting_date"],
                name="unique_daily_sales_per_store_date",
            ),
        ]
        indexes = [
            models.Index(fields=["store_location", "is_finalized"], name="daily_sales_loc_final_idx"),
        ]

    def __str__(self):
        return f"{self.store_location} {self.accounting_date} ({self.status})"

    @property
    def status(self):
        return "finalized" if self.is_finalized else "draft"

    def _is_finalized_in_db(self):
        if self.pk is None:
            return False
        return DailySales.objects.filter(pk=self.pk, is_finalized=True).exists()

    def save(self, *args, **kwargs):
        if self._is_finalized_in_db():
            raise AlreadyFinalized(self.store_location_id, self.accounting_date)
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        if self._is_finalized_in_db():
            raise AlreadyFinalized(self.store_location_id, self.accounting_date)
        return super().delete(*args, **kwargs)
