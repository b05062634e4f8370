from rest_framework.response import Response
from rest_framework.views import APIView
import logging

from core_backend.base.mixins import ErrorResponseMixin, StoreLocationMixin

from .exceptions import BusinessHoursError, NoBusinessHoursConfigured
from .models import BusinessHoursProfile
from .serializers import (
    AccountingDayQuerySerializer,
    BusinessHoursProfileSerializer,
    BusinessHoursUpdateSerializer,
)
from .services import AccountingDayResolver, BusinessHoursService

logger = logging.getLogger(__name__)


class StoreBusinessHoursView(StoreLocationMixin, ErrorResponseMixin, APIView):
    """Read or replace the business hours of a store"""

    def get(self, request, store_id):
        store_location = self.get_store_location()
        profile = (
            BusinessHoursProfile.objects
            .select_related('store_location')
            .filter(store_location=store_location, is_active=True)
            .first()
        )
        if profile is None:
            return self.error_response(NoBusinessHoursConfigured(store_location.pk))
        return Response(BusinessHoursProfileSerializer(profile).data)

    def put(self, request, store_id):
        """
        Replace open/close time.

        Body: {"open_time": "17:00", "close_time": "26:00"}
        Existing daily sales keep the period they were calculated with.
        """
        store_location = self.get_store_location()
        serializer = BusinessHoursUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            BusinessHoursService.update_for_store(
                store_location.pk,
                serializer.validated_data['open_time'],
                serializer.validated_data['close_time'],
            )
        except BusinessHoursError as e:
            logger.warning(f"Rejected business hours update for store {store_location.pk}: {e}")
            return self.error_response(e)
        except Exception as e:
            logger.error(f"Error updating business hours for store {store_location.pk}: {e}", exc_info=True)
            return self.server_error_response("Failed to update business hours")

        profile = BusinessHoursProfile.objects.select_related('store_location').get(
            store_location=store_location
        )
        return Response(BusinessHoursProfileSerializer(profile).data)


class AccountingDayView(StoreLocationMixin, ErrorResponseMixin, APIView):
    """
    Resolve an accounting day of a store.

    Query params:
    - at: ISO datetime; resolves the accounting day that instant belongs to
    - date: YYYY-MM-DD; resolves the period of that accounting date
    With neither, the current accounting day is returned.
    """

    def get(self, request, store_id):
        store_location = self.get_store_location()
        query = AccountingDayQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        try:
            hours = BusinessHoursService.get_for_store(store_location.pk)
            if 'date' in query.validated_data:
                day = AccountingDayResolver.resolve_period(hours, query.validated_data['date'])
                is_open = None
            else:
                at = query.validated_data.get('at')
                if at is None:
                    accounting_date = AccountingDayResolver.current_accounting_date(hours)
                    day = AccountingDayResolver.resolve_period(hours, accounting_date)
                else:
                    day = AccountingDayResolver.resolve(hours, at)
                is_open = AccountingDayResolver.is_open(hours, at)
        except BusinessHoursError as e:
            return self.error_response(e)
        except Exception as e:
            logger.error(f"Error resolving accounting day for store {store_location.pk}: {e}", exc_info=True)
            return self.server_error_response("Failed to resolve accounting day")

        data = day.to_dict()
        data['business_hours'] = hours.to_dict()
        if is_open is not None:
            data['is_open'] = is_open
        return Response(data)
