"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like users, store locations, business hours and orders.
"""
import pytest
from datetime import datetime
from decimal import Decimal

import pytz
from django.contrib.auth import get_user_model

from business_hours.models import BusinessHoursProfile
from orders.models import Order, OrderItem
from settings.models import StoreLocation


def local_datetime(tz_name, *args):
    """Aware datetime for a wall-clock time in the given timezone."""
    return pytz.timezone(tz_name).localize(datetime(*args))


def tokyo(*args):
    return local_datetime('Asia/Tokyo', *args)


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def admin_user(db):
    """Create a staff user for API tests"""
    return get_user_model().objects.create_user(
        username='manager',
        email='manager@example.com',
        password='password123',
        is_staff=True,
    )


# ============================================================================
# STORE LOCATION FIXTURES
# ============================================================================

@pytest.fixture
def store_location(db):
    """Tokyo store used by most tests"""
    return StoreLocation.objects.create(name='Shibuya', timezone='Asia/Tokyo')


@pytest.fixture
def other_store_location(db):
    """Second store, to check that data never leaks between stores"""
    return StoreLocation.objects.create(name='Umeda', timezone='Asia/Tokyo')


# ============================================================================
# BUSINESS HOURS FIXTURES
# ============================================================================

@pytest.fixture
def evening_hours(store_location):
    """17:00 to 2:00 the next morning"""
    return BusinessHoursProfile.objects.create(
        store_location=store_location,
        open_time='17:00',
        close_time='26:00',
    )


@pytest.fixture
def day_hours(store_location):
    """09:00 to 17:00, same day"""
    return BusinessHoursProfile.objects.create(
        store_location=store_location,
        open_time='09:00',
        close_time='17:00',
    )


# ============================================================================
# ORDER FIXTURES
# ============================================================================

@pytest.fixture
def order_factory(db):
    """
    Build orders with explicit placement time and totals.

    Usage:
        order_factory(store_location, tokyo(2024, 6, 12, 23, 30),
                      grand_total='1100', tax_total='100', items=[('Beer', 2, '500')])
    """
    def create_order(
        store_location,
        created_at,
        grand_total='0.00',
        tax_total='0.00',
        items=(),
        status=Order.OrderStatus.COMPLETED,
        order_number=None,
    ):
        grand_total = Decimal(str(grand_total))
        tax_total = Decimal(str(tax_total))
        order = Order.objects.create(
            store_location=store_location,
            order_number=order_number,
            status=status,
            subtotal=grand_total - tax_total,
            tax_total=tax_total,
            grand_total=grand_total,
            created_at=created_at,
        )
        for name, quantity, price in items:
            OrderItem.objects.create(
                order=order,
                name=name,
                quantity=quantity,
                price_at_sale=Decimal(str(price)),
            )
        return order

    return create_order
