"""Subcommand registrations for the storefront CLI."""

from . import cart, checkout, delivery, discount, orders, reviews, status

__all__ = ["cart", "checkout", "delivery", "discount", "orders", "reviews", "status"]
