from decimal import Decimal
from django.db import transaction
from django.utils import timezone
import logging

from orders.models import Order, OrderItem

logger = logging.getLogger(__name__)


class OrderService:
    """Core service for order lifecycle management and period queries."""

    # Valid status transitions for order state machine
    VALID_STATUS_TRANSITIONS = {
        Order.OrderStatus.PENDING: [
            Order.OrderStatus.PENDING,
            Order.OrderStatus.COMPLETED,
            Order.OrderStatus.CANCELLED,
            Order.OrderStatus.VOID,
        ],
        Order.OrderStatus.COMPLETED: [
            Order.OrderStatus.VOID,  # Allow voiding completed orders to fix errors
        ],
        Order.OrderStatus.CANCELLED: [],
        Order.OrderStatus.VOID: [],
    }

    @staticmethod
    @transaction.atomic
    def create_new_order(store_location, order_number=None, created_at=None) -> Order:
        """
        Creates a new, empty order.

        Args:
            store_location: StoreLocation for the order
            order_number: Optional display number, unique per location
            created_at: Placement time, defaults to now

        Raises:
            ValueError: If store_location is not provided
        """
        if store_location is None:
            raise ValueError("store_location parameter is required for creating orders")

        order = Order(store_location=store_location, order_number=order_number)
        if created_at is not None:
            order.created_at = created_at
        order.save()
        return order

    @staticmethod
    @transaction.atomic
    def add_item(order: Order, name: str, quantity: int, price: Decimal) -> OrderItem:
        if order.status != Order.OrderStatus.PENDING:
            raise ValueError(f"Cannot add items to an order in status {order.status}.")
        if quantity < 1:
            raise ValueError("Quantity must be at least 1.")

        item = OrderItem.objects.create(
            order=order, name=name, quantity=quantity, price_at_sale=price
        )
        order.recalculate_totals()
        return item

    @staticmethod
    @transaction.atomic
    def update_order_status(order: Order, new_status: str) -> Order:
        """
        Updates the status of an order, checking for valid transitions.
        """
        if new_status not in Order.OrderStatus.values:
            raise ValueError(f"'{new_status}' is not a valid order status.")

        if new_status not in OrderService.VALID_STATUS_TRANSITIONS.get(
            order.status, []
        ):
            raise ValueError(
                f"Cannot transition order from {order.status} to {new_status}."
            )

        order.status = new_status
        order.save(update_fields=["status", "updated_at"])
        return order

    @staticmethod
    @transaction.atomic
    def complete_order(order: Order, tax_total: Decimal = None) -> Order:
        """
        Marks an order as paid.

        The tax amount is supplied by the caller (the payment flow); it is
        not derived from tax rates here.
        """
        if tax_total is not None:
            order.tax_total = tax_total
            order.save(update_fields=["tax_total", "updated_at"])
            order.recalculate_totals()

        order = OrderService.update_order_status(order, Order.OrderStatus.COMPLETED)
        order.completed_at = timezone.now()
        order.save(update_fields=["completed_at", "updated_at"])
        logger.info(f"Completed order {order.order_number or order.pk} ({order.grand_total})")
        return order

    @staticmethod
    def cancel_order(order: Order) -> Order:
        """Sets an order's status to CANCELLED after checking transition validity."""
        return OrderService.update_order_status(order, Order.OrderStatus.CANCELLED)

    @staticmethod
    def void_order(order: Order) -> Order:
        """Sets an order's status to VOID after checking transition validity."""
        logger.info(f"Voiding order {order.order_number or order.pk}")
        return OrderService.update_order_status(order, Order.OrderStatus.VOID)

    @staticmethod
    def billable_orders_for_period(store_location_id, period_start, period_end):
        """
        Orders that count towards sales in ``[period_start, period_end)``.

        Ascending by id with the summed item quantity annotated as
        ``total_items``. The queryset is lazy; callers iterate it.
        """
        return (
            Order.objects
            .for_store(store_location_id)
            .billable()
            .created_between(period_start, period_end)
            .with_item_counts()
            .order_by("id")
        )
