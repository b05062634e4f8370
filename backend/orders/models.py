from decimal import Decimal
from django.db import models
from django.db.models import F, Sum
from django.utils.translation import gettext_lazy as _
from django.utils import timezone


class OrderQuerySet(models.QuerySet):
    def for_store(self, store_location_id):
        return self.filter(store_location_id=store_location_id)

    def billable(self):
        """Orders that count towards sales: everything except cancelled and voided."""
        return self.exclude(status__in=Order.NON_BILLABLE_STATUSES)

    def created_between(self, start, end):
        """Half-open range: start <= created_at < end."""
        return self.filter(created_at__gte=start, created_at__lt=end)

    def with_item_counts(self):
        return self.annotate(total_items=Sum("items__quantity"))


class Order(models.Model):
    # --- Status Fields ---
    class OrderStatus(models.TextChoices):
        PENDING = "PENDING", _("Pending")  # Placed, not yet paid
        COMPLETED = "COMPLETED", _("Completed")  # Successfully paid for
        CANCELLED = "CANCELLED", _(
            "Cancelled"
        )  # Customer changed their mind before payment
        VOID = "VOID", _(
            "Void"
        )  # An error was made, needs to be nullified post-completion

    NON_BILLABLE_STATUSES = (OrderStatus.CANCELLED, OrderStatus.VOID)

    store_location = models.ForeignKey(
        'settings.StoreLocation',
        on_delete=models.PROTECT,
        related_name='orders',
        help_text='Store location where this order was placed'
    )
    status = models.CharField(
        max_length=10, choices=OrderStatus.choices, default=OrderStatus.PENDING
    )

    # order_number as CharField
    order_number = models.CharField(max_length=20, blank=True, null=True)

    # --- Financial Fields ---
    subtotal = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    tax_total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))
    grand_total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal("0.00"))

    # Placement time; decides which accounting day the order belongs to
    created_at = models.DateTimeField(default=timezone.now, editable=False, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(
        null=True, blank=True, help_text=_("Timestamp when the order was paid.")
    )

    objects = OrderQuerySet.as_manager()

    class Meta:
        # Show newest orders first, with order_number as secondary sort for same timestamps
        ordering = ["-created_at", "order_number"]
        verbose_name = _("Order")
        verbose_name_plural = _("Orders")
        indexes = [
            models.Index(fields=['store_location', 'created_at'], name='order_loc_created_idx'),
            models.Index(fields=['store_location', 'status', 'created_at'], name='order_loc_stat_dt_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=["store_location", "order_number"],
                condition=models.Q(order_number__isnull=False),
                name="unique_order_number_per_location",
            ),
        ]

    def __str__(self):
        return f"Order {self.order_number or self.pk} ({self.get_status_display()})"

    @property
    def is_billable(self):
        return self.status not in self.NON_BILLABLE_STATUSES

    def recalculate_totals(self):
        """Recompute subtotal and grand total from line items. Tax stays as supplied."""
        subtotal = self.items.aggregate(
            total=Sum(F("price_at_sale") * F("quantity"))
        )["total"] or Decimal("0.00")
        self.subtotal = subtotal
        self.grand_total = subtotal + self.tax_total
        self.save(update_fields=["subtotal", "grand_total", "updated_at"])


class OrderItem(models.Model):
    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    name = models.CharField(max_length=200)
    quantity = models.PositiveIntegerField(default=1)

    # Price snapshot
    price_at_sale = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text=_("Price of the product at the time of sale."),
    )

    class Meta:
        ordering = ["id"]
        verbose_name = _("Order Item")
        verbose_name_plural = _("Order Items")

    def __str__(self):
        return f"{self.quantity} x {self.name}"

    @property
    def total_price(self):
        return self.price_at_sale * self.quantity
