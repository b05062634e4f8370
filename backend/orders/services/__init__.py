"""
Orders services package.

- OrderService: order lifecycle (create, add items, complete, cancel, void)
  and the period queries used by daily sales calculation
"""

from .order_service import OrderService

__all__ = [
    'OrderService',
]
