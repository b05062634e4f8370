from rest_framework import status
from rest_framework.decorators import action
from rest_framework.response import Response
import logging

from business_hours.exceptions import BusinessHoursError
from core_backend.base.mixins import ErrorResponseMixin, StoreLocationMixin
from core_backend.base.viewsets import ReadOnlyBaseViewSet

from .exceptions import AccountingError
from .filters import DailySalesFilter
from .models import DailySales
from .serializers import (
    CalculateDailySalesSerializer,
    DailySalesSerializer,
    FinalizeDailySalesSerializer,
    SalesSummaryParameterSerializer,
    SalesSummaryRowSerializer,
)
from .services import DailySalesAggregator, DailySalesLedger, SalesSummaryService

logger = logging.getLogger(__name__)


class DailySalesViewSet(StoreLocationMixin, ErrorResponseMixin, ReadOnlyBaseViewSet):
    """
    Daily sales of one store.

    GET  .../daily-sales/?start_date=2024-01-01&end_date=2024-01-31
    GET  .../daily-sales/2024-01-15/
    POST .../daily-sales/calculate/ {"date": "2024-01-15"}
    POST .../daily-sales/finalize/ {"date": "2024-01-15"}
    GET  .../daily-sales/summary/?start_date=...&end_date=...&group_by=week
    """

    queryset = DailySales.objects.all()
    serializer_class = DailySalesSerializer
    filterset_class = DailySalesFilter
    lookup_field = "accounting_date"
    lookup_value_regex = r"\d{4}-\d{2}-\d{2}"
    ordering_fields = ["accounting_date"]
    ordering = ["accounting_date"]

    def get_queryset(self):
        store_location = self.get_store_location()
        return super().get_queryset().filter(store_location=store_location)

    @action(detail=False, methods=["post"])
    def calculate(self, request, store_id=None):
        """Calculate (or recalculate) a day as a draft"""
        store_location = self.get_store_location()
        serializer = CalculateDailySalesSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        accounting_date = serializer.validated_data.get("date")
        try:
            if accounting_date is None:
                record = DailySalesAggregator.calculate_current(store_location.pk)
            else:
                record = DailySalesAggregator.calculate(store_location.pk, accounting_date)
        except (AccountingError, BusinessHoursError) as e:
            return self.error_response(e)
        except Exception as e:
            logger.error(
                f"Daily sales calculation failed for store {store_location.pk}: {e}",
                exc_info=True
            )
            return self.server_error_response("Failed to calculate daily sales")

        return Response(DailySalesSerializer(record).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["post"])
    def finalize(self, request, store_id=None):
        """Lock a calculated day. Finalized days can no longer be recalculated."""
        store_location = self.get_store_location()
        serializer = FinalizeDailySalesSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            record = DailySalesLedger.finalize(store_location.pk, serializer.validated_data["date"])
        except AccountingError as e:
            return self.error_response(e)
        except Exception as e:
            logger.error(
                f"Daily sales finalize failed for store {store_location.pk}: {e}",
                exc_info=True
            )
            return self.server_error_response("Failed to finalize daily sales")

        return Response(DailySalesSerializer(record).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"])
    def summary(self, request, store_id=None):
        """Stored daily sales grouped by day, week or month"""
        store_location = self.get_store_location()
        serializer = SalesSummaryParameterSerializer(data=request.query_params)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        try:
            rows = SalesSummaryService.summarize(
                store_location.pk,
                serializer.validated_data["start_date"],
                serializer.validated_data["end_date"],
                serializer.validated_data["group_by"],
            )
        except Exception as e:
            logger.error(f"Sales summary failed for store {store_location.pk}: {e}", exc_info=True)
            return self.server_error_response("Failed to generate sales summary")

        return Response(SalesSummaryRowSerializer(rows, many=True).data, status=status.HTTP_200_OK)
