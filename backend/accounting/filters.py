import django_filters

from core_backend.base.filters import BaseFilterSet

from .models import DailySales


class DailySalesFilter(BaseFilterSet):
    """
    ?date=YYYY-MM-DD for one day, ?start_date&end_date for an inclusive range.
    """

    date = django_filters.DateFilter(field_name="accounting_date", input_formats=["%Y-%m-%d"])
    start_date = django_filters.DateFilter(
        field_name="accounting_date", lookup_expr="gte", input_formats=["%Y-%m-%d"]
    )
    end_date = django_filters.DateFilter(
        field_name="accounting_date", lookup_expr="lte", input_formats=["%Y-%m-%d"]
    )
    is_finalized = django_filters.BooleanFilter(method="filter_is_finalized")

    class Meta:
        model = DailySales
        fields = ["date", "start_date", "end_date", "is_finalized"]

    def filter_is_finalized(self, queryset, name, value):
        return queryset.finalized() if value else queryset.drafts()
