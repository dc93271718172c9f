"""Crochet Hub storefront state layer.

Keeps the shopping cart, delivery profile, discount token and order history
consistent with a persistent key-value store, and runs checkout.
"""

__version__ = "1.0.0"
