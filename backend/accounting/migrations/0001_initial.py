import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("settings", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="DailySales",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("accounting_date", models.DateField(help_text="Accounting date. The day starts at the store's opening time.")),
                ("total_orders", models.PositiveIntegerField(default=0)),
                ("total_items", models.PositiveIntegerField(default=0)),
                ("total_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("tax_amount", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=12)),
                ("period_start", models.DateTimeField()),
                ("period_end", models.DateTimeField()),
                ("is_finalized", models.BooleanField(default=False)),
                ("finalized_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "store_location",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="daily_sales",
                        to="settings.storelocation",
                    ),
                ),
            ],
            options={
                "verbose_name": "Daily Sales",
                "verbose_name_plural": "Daily Sales",
                "ordering": ["accounting_date"],
                "indexes": [
                    models.Index(fields=["store_location", "is_finalized"], name="daily_sales_loc_final_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("store_location", "accounting_date"),
                        name="unique_daily_sales_per_store_date",
                    ),
                ],
            },
        ),
    ]
