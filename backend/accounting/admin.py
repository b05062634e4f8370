from django.contrib import admin

from .models import DailySales


@admin.register(DailySales)
class DailySalesAdmin(admin.ModelAdmin):
    """
    Daily sales are written only by the calculation service, so the admin
    is read-only. Finalized rows cannot be deleted.
    """

    list_display = [
        "accounting_date", "store_location", "total_orders", "total_items",
        "total_amount", "tax_amount", "is_finalized", "finalized_at",
    ]
    list_filter = ["is_finalized", "store_location"]
    list_select_related = ["store_location"]
    date_hierarchy = "accounting_date"
    ordering = ["-accounting_date"]

    def get_readonly_fields(self, request, obj=None):
        return [field.name for field in self.model._meta.fields]

    def get_actions(self, request):
        actions = super().get_actions(request)
        actions.pop("delete_selected", None)
        return actions

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        if obj is not None and obj.is_finalized:
            return False
        return super().has_delete_permission(request, obj)
