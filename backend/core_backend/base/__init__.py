"""
Core backend base components.

This package provides foundational classes and utilities that should be used
throughout the Django application for consistency and maintainability.
"""

from .viewsets import ReadOnlyBaseViewSet
from .serializers import (
    BaseModelSerializer,
    TimestampedSerializer
)
from .mixins import OptimizedQuerysetMixin, StoreLocationMixin, ErrorResponseMixin
from .filters import BaseFilterSet

__all__ = [
    # ViewSets
    'ReadOnlyBaseViewSet',

    # Serializers
    'BaseModelSerializer',
    'TimestampedSerializer',

    # Mixins
    'OptimizedQuerysetMixin',
    'StoreLocationMixin',
    'ErrorResponseMixin',

    # Filters
    'BaseFilterSet',
]
