from django.utils import timezone
from rest_framework import serializers

from core_backend.base.serializers import TimestampedSerializer

from .models import BusinessHoursProfile


class BusinessHoursProfileSerializer(TimestampedSerializer):
    """Stored business hours of a store with derived display fields"""

    store_location_name = serializers.CharField(source='store_location.name', read_only=True)
    timezone = serializers.CharField(read_only=True)
    is_next_day = serializers.BooleanField(read_only=True)
    display = serializers.CharField(read_only=True)
    open_time_display = serializers.SerializerMethodField()
    close_time_display = serializers.SerializerMethodField()

    class Meta:
        model = BusinessHoursProfile
        fields = [
            'id', 'store_location', 'store_location_name', 'open_time', 'close_time',
            'open_time_display', 'close_time_display', 'is_next_day', 'timezone',
            'display', 'is_active', 'created_at', 'updated_at',
        ]
        read_only_fields = fields
        select_related_fields = ['store_location']

    def get_open_time_display(self, obj):
        return obj.opening.normalize()

    def get_close_time_display(self, obj):
        return obj.closing.normalize()


class BusinessHoursUpdateSerializer(serializers.Serializer):
    """
    Request body for replacing a store's business hours.

    Only presence is checked here; the time format and the open/close pair
    are validated by BusinessHoursService so the error codes stay stable.
    """

    open_time = serializers.CharField(trim_whitespace=False)
    close_time = serializers.CharField(trim_whitespace=False)


class StoreLocalDateTimeField(serializers.DateTimeField):
    """
    DateTimeField that leaves naive input naive.

    DRF would attach the server timezone (UTC) to a value without an offset.
    Here a naive value means store-local wall-clock time, and the resolver
    attaches the store's timezone itself.
    """

    def enforce_timezone(self, value):
        if timezone.is_naive(value):
            return value
        return super().enforce_timezone(value)


class AccountingDayQuerySerializer(serializers.Serializer):
    """Query params for resolving an accounting day"""

    at = StoreLocalDateTimeField(required=False)
    date = serializers.DateField(required=False, input_formats=['%Y-%m-%d'])

    def validate(self, data):
        if 'at' in data and 'date' in data:
            raise serializers.ValidationError("Pass either 'at' or 'date', not both")
        return data

