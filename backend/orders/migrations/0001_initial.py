import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("settings", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Order",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("PENDING", "Pending"),
                            ("COMPLETED", "Completed"),
                            ("CANCELLED", "Cancelled"),
                            ("VOID", "Void"),
                        ],
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                ("order_number", models.CharField(blank=True, max_length=20, null=True)),
                ("subtotal", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("tax_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("grand_total", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=10)),
                ("created_at", models.DateTimeField(db_index=True, default=django.utils.timezone.now, editable=False)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("completed_at", models.DateTimeField(blank=True, help_text="Timestamp when the order was paid.", null=True)),
                (
                    "store_location",
                    models.ForeignKey(
                        help_text="Store location where this order was placed",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="settings.storelocation",
                    ),
                ),
            ],
            options={
                "verbose_name": "Order",
                "verbose_name_plural": "Orders",
                "ordering": ["-created_at", "order_number"],
                "indexes": [
                    models.Index(fields=["store_location", "created_at"], name="order_loc_created_idx"),
                    models.Index(fields=["store_location", "status", "created_at"], name="order_loc_stat_dt_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("order_number__isnull", False)),
                        fields=("store_location", "order_number"),
                        name="unique_order_number_per_location",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="OrderItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200)),
                ("quantity", models.PositiveIntegerField(default=1)),
                ("price_at_sale", models.DecimalField(decimal_places=2, help_text="Price of the product at the time of sale.", max_digits=10)),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="items",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "Order Item",
                "verbose_name_plural": "Order Items",
                "ordering": ["id"],
            },
        ),
    ]
