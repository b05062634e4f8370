from django.contrib import admin
from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("price_at_sale", "get_line_item_total")
    fields = ("name", "quantity", "price_at_sale", "get_line_item_total")

    def get_line_item_total(self, obj):
        return f"{obj.total_price:,.2f}"

    get_line_item_total.short_description = "Line Item Total"


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Order model.
    """

    list_display = (
        "order_number",
        "store_location",
        "status",
        "grand_total",
        "tax_total",
        "created_at",
    )
    list_display_links = ("order_number",)
    list_filter = ("status", "store_location")
    search_fields = ("order_number",)
    list_select_related = ("store_location",)
    readonly_fields = ("subtotal", "grand_total", "created_at", "updated_at", "completed_at")
    inlines = [OrderItemInline]
    ordering = ("-created_at",)
