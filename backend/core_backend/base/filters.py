import django_filters


class BaseFilterSet(django_filters.FilterSet):
    """
    Base filter set with common filtering patterns.
    """

    # Common date range filters
    created_after = django_filters.IsoDateTimeFilter(field_name='created_at', lookup_expr='gte')
    created_before = django_filters.IsoDateTimeFilter(field_name='created_at', lookup_expr='lte')

    class Meta:
        abstract = True
