# app/models/__init__.py
"""
Database models module initialization.
Exports all database models for convenient imports throughout the application.

Models exported:
- Order: Sale record written by the fulfillment workflow (read-only here)
- OrderStatus: Order lifecycle states
"""
from .order import Order, OrderStatus, ELIGIBLE_STATUSES
