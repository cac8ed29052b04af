"""Database models."""
from .marketplace import Business, Order, OrderItem, Product, Review, User, utcnow

__all__ = [
    "Business",
    "Order",
    "OrderItem",
    "Product",
    "Review",
    "User",
    "utcnow",
]
