from rest_framework import serializers

from core_backend.base.serializers import TimestampedSerializer

from .models import DailySales
from .services import SalesSummaryService

DATE_INPUT_FORMATS = ["%Y-%m-%d"]


class DailySalesSerializer(TimestampedSerializer):
    """Serializer for stored daily sales"""

    store_location_name = serializers.CharField(source="store_location.name", read_only=True)
    status = serializers.CharField(read_only=True)

    class Meta:
        model = DailySales
        fields = [
            "id", "store_location", "store_location_name", "accounting_date",
            "total_orders", "total_items", "total_amount", "tax_amount",
            "period_start", "period_end", "status", "is_finalized", "finalized_at",
            "created_at", "updated_at",
        ]
        read_only_fields = fields
        select_related_fields = ["store_location"]


class CalculateDailySalesSerializer(serializers.Serializer):
    """Body of a calculate request. Without a date the current accounting day is used."""

    date = serializers.DateField(required=False, input_formats=DATE_INPUT_FORMATS)


class FinalizeDailySalesSerializer(serializers.Serializer):
    date = serializers.DateField(input_formats=DATE_INPUT_FORMATS)


class DateRangeSerializer(serializers.Serializer):
    """Validate an inclusive date range"""

    start_date = serializers.DateField(input_formats=DATE_INPUT_FORMATS)
    end_date = serializers.DateField(input_formats=DATE_INPUT_FORMATS)

    def validate(self, data):
        if data["start_date"] > data["end_date"]:
            raise serializers.ValidationError("Start date must not be after end date")
        return data


class SalesSummaryParameterSerializer(DateRangeSerializer):
    group_by = serializers.ChoiceField(
        choices=SalesSummaryService.GROUP_BY_CHOICES, default="day"
    )


class SalesSummaryRowSerializer(serializers.Serializer):
    period = serializers.DateField()
    days = serializers.IntegerField()
    total_orders = serializers.IntegerField()
    total_items = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    tax_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    average_daily_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
