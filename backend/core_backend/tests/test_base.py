"""
Core Backend Tests

Health check, JWT authentication and the shared error response mapping.
"""

import pytest
from datetime import date
from rest_framework import status

from accounting.exceptions import AlreadyFinalized, NotCalculated, OrderStoreUnavailable
from business_hours.exceptions import InvalidBusinessHours, InvalidTimeFormat, NoBusinessHoursConfigured
from core_backend.base.mixins import ErrorResponseMixin


class TestErrorResponseMixin:
    """Typed exceptions -> {"error", "code"} responses"""

    @pytest.mark.parametrize("exc,expected_status", [
        (InvalidTimeFormat("9:5"), status.HTTP_400_BAD_REQUEST),
        (InvalidBusinessHours("17:00", "02:00"), status.HTTP_400_BAD_REQUEST),
        (NoBusinessHoursConfigured(1), status.HTTP_404_NOT_FOUND),
        (NotCalculated(1, date(2024, 6, 12)), status.HTTP_404_NOT_FOUND),
        (AlreadyFinalized(1, date(2024, 6, 12)), status.HTTP_409_CONFLICT),
        (OrderStoreUnavailable(1, date(2024, 6, 12)), status.HTTP_503_SERVICE_UNAVAILABLE),
    ])
    def test_status_by_code(self, exc, expected_status):
        response = ErrorResponseMixin().error_response(exc)

        assert response.status_code == expected_status
        assert response.data == {"error": str(exc), "code": exc.code}


@pytest.mark.django_db
@pytest.mark.integration
class TestAuthentication:
    """Token endpoints and health check"""

    def test_health_check_is_public(self, api_client):
        response = api_client.get('/api/health/')
        assert response.status_code == status.HTTP_200_OK

    def test_obtain_token_and_call_api(self, api_client, admin_user, evening_hours, store_location):
        response = api_client.post(
            '/api/auth/token/', {'username': 'manager', 'password': 'password123'}, format='json'
        )
        assert response.status_code == status.HTTP_200_OK

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = api_client.get(f'/api/business-hours/stores/{store_location.id}/')
        assert response.status_code == status.HTTP_200_OK
