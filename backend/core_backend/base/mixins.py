from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.response import Response


class OptimizedQuerysetMixin:
    """
    A ViewSet mixin that optimizes the queryset using the
    `select_related_fields` and `prefetch_related_fields` attributes
    declared in the current serializer's Meta class.
    """

    def get_queryset(self):
        queryset = super().get_queryset()

        try:
            serializer_class = self.get_serializer_class()
        except (AttributeError, AssertionError):
            return queryset

        meta = getattr(serializer_class, "Meta", None)
        select_related = getattr(meta, "select_related_fields", [])
        prefetch_related = getattr(meta, "prefetch_related_fields", [])

        if select_related:
            queryset = queryset.select_related(*select_related)

        if prefetch_related:
            queryset = queryset.prefetch_related(*prefetch_related)

        return queryset


class StoreLocationMixin:
    """
    Resolves the store location named by the URL.

    Unknown ids raise Http404 before any service code runs.
    """

    store_url_kwarg = "store_id"

    def get_store_location(self):
        from settings.models import StoreLocation

        if not hasattr(self, "_store_location"):
            self._store_location = get_object_or_404(
                StoreLocation, pk=self.kwargs[self.store_url_kwarg]
            )
        return self._store_location


class ErrorResponseMixin:
    """
    Turns typed domain exceptions into ``{"error": ..., "code": ...}``
    responses. The HTTP status is looked up by the exception's ``code``.
    """

    error_status_codes = {
        "invalid_time_format": status.HTTP_400_BAD_REQUEST,
        "invalid_business_hours": status.HTTP_400_BAD_REQUEST,
        "no_business_hours_configured": status.HTTP_404_NOT_FOUND,
        "not_calculated": status.HTTP_404_NOT_FOUND,
        "already_finalized": status.HTTP_409_CONFLICT,
        "order_fetch_timeout": status.HTTP_503_SERVICE_UNAVAILABLE,
        "order_store_unavailable": status.HTTP_503_SERVICE_UNAVAILABLE,
    }

    def error_response(self, exc):
        code = getattr(exc, "code", None)
        http_status = self.error_status_codes.get(code, status.HTTP_400_BAD_REQUEST)
        return Response({"error": str(exc), "code": code}, status=http_status)

    def server_error_response(self, message="Internal server error"):
        return Response(
            {"error": message},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
