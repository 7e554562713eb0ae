# ==============================================================================
# CORE PACKAGE INITIALIZATION
# ==============================================================================
# Core utilities: Settings, Exceptions, Constants, Logging, Pricing
# ==============================================================================

"""
Core Module
===========

Contains core utilities and configurations for the application:
- settings: Environment configuration management
- exceptions: Custom exception classes
- constants: Application-wide constants and status enums
- logging: Root logger configuration
- pricing: Order totals and inventory status rules
"""

from bizdash.core.settings import settings, get_settings, DatabaseType
from bizdash.core.exceptions import (
    AppException,
    DatabaseError,
    NotFoundError,
    AlreadyExistsError,
    ValidationError,
    BusinessRuleError,
    InsufficientStockError,
    OrderInFlightError,
    OrderAlreadyFulfilledError,
    FulfillmentError,
)
from bizdash.core.pricing import (
    Totals,
    calculate_totals,
    compute_product_status,
    apply_sale,
)

__all__ = [
    "settings",
    "get_settings",
    "DatabaseType",
    "AppException",
    "DatabaseError",
    "NotFoundError",
    "AlreadyExistsError",
    "ValidationError",
    "BusinessRuleError",
    "InsufficientStockError",
    "OrderInFlightError",
    "OrderAlreadyFulfilledError",
    "FulfillmentError",
    "Totals",
    "calculate_totals",
    "compute_product_status",
    "apply_sale",
]
