from django.contrib import admin

from .models import BusinessHoursProfile


@admin.register(BusinessHoursProfile)
class BusinessHoursProfileAdmin(admin.ModelAdmin):
    list_display = ['store_location', 'open_time', 'close_time', 'display', 'is_next_day', 'is_active', 'updated_at']
    list_filter = ['is_active', 'store_location__timezone']
    search_fields = ['store_location__name']
    list_select_related = ['store_location']
    readonly_fields = ['display', 'is_next_day', 'created_at', 'updated_at']

    fieldsets = (
        (None, {
            'fields': ('store_location', 'is_active')
        }),
        ('Hours', {
            'fields': ('open_time', 'close_time', 'display', 'is_next_day'),
            'description': 'Closing times after midnight are written as 24:00-26:59 (e.g. 26:00 for 2:00 AM).'
        }),
        ('Metadata', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    @admin.display(description='Hours')
    def display(self, obj):
        return obj.display

    @admin.display(boolean=True, description='Next day')
    def is_next_day(self, obj):
        return obj.is_next_day
