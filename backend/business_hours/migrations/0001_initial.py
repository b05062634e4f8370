import business_hours.time_of_day
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("settings", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="BusinessHoursProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "open_time",
                    models.CharField(
                        help_text="Opening time (HH:MM, 00:00-26:59). Starts the accounting day.",
                        max_length=5,
                        validators=[business_hours.time_of_day.validate_time_of_day],
                    ),
                ),
                (
                    "close_time",
                    models.CharField(
                        help_text="Closing time (HH:MM). Use 24:00-26:59 for times after midnight.",
                        max_length=5,
                        validators=[business_hours.time_of_day.validate_time_of_day],
                    ),
                ),
                ("is_active", models.BooleanField(default=True, help_text="Whether this profile is currently active")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "store_location",
                    models.OneToOneField(
                        help_text="Store location this business hours profile belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="business_hours",
                        to="settings.storelocation",
                    ),
                ),
            ],
            options={
                "verbose_name": "Business Hours Profile",
                "verbose_name_plural": "Business Hours Profiles",
                "ordering": ["store_location__name"],
            },
        ),
    ]
