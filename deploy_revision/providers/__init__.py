"""Checkout providers"""

from .base import CheckoutProvider
from .git import GitCheckoutProvider

__all__ = [
    'CheckoutProvider',
    'GitCheckoutProvider',
]
