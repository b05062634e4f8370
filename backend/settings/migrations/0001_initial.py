from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="StoreLocation",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(help_text="Location name (e.g., 'Shibuya', 'Umeda')", max_length=100)),
                ("slug", models.SlugField(blank=True, help_text="URL-friendly identifier for this location", max_length=100, unique=True)),
                (
                    "timezone",
                    models.CharField(
                        choices=[
                            ("UTC", "UTC (Coordinated Universal Time)"),
                            ("Asia/Tokyo", "Japan Standard Time"),
                            ("Asia/Seoul", "Korea Standard Time"),
                            ("Asia/Shanghai", "China Standard Time"),
                            ("Asia/Singapore", "Singapore Time"),
                            ("America/New_York", "Eastern Time (US & Canada)"),
                            ("America/Chicago", "Central Time (US & Canada)"),
                            ("America/Denver", "Mountain Time (US & Canada)"),
                            ("America/Los_Angeles", "Pacific Time (US & Canada)"),
                            ("Pacific/Honolulu", "Hawaii Time (US)"),
                            ("Europe/London", "Greenwich Mean Time (UK)"),
                            ("Europe/Paris", "Central European Time"),
                            ("Europe/Berlin", "Central European Time (Germany)"),
                            ("Australia/Sydney", "Australian Eastern Time"),
                        ],
                        default="Asia/Tokyo",
                        help_text="This location's timezone. Used for business hours and accounting days.",
                        max_length=50,
                    ),
                ),
                ("is_active", models.BooleanField(default=True, help_text="Inactive locations are skipped by scheduled sales calculation")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Store Location",
                "verbose_name_plural": "Store Locations",
                "ordering": ["name"],
            },
        ),
    ]
