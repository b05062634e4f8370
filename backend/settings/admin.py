from django.contrib import admin

from .models import StoreLocation


@admin.register(StoreLocation)
class StoreLocationAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "timezone", "is_active", "updated_at")
    list_filter = ("is_active", "timezone")
    search_fields = ("name", "slug")
    readonly_fields = ("created_at", "updated_at")
