# ==============================================================================
# BIZDASH PACKAGE INITIALIZATION
# ==============================================================================
# Business dashboard backend: clients, catalog, orders and invoicing
# Backed by a hosted document database (MongoDB) through async adapters
# ==============================================================================

"""
Business Dashboard Backend
==========================

FastAPI service behind a small business-management dashboard.

Features:
---------
- Client relationship management with pending-order aggregation
- Product catalog with inventory statistics
- Order intake with tax/total calculation
- Order fulfillment: invoice generation and inventory adjustment
- Dashboard revenue statistics

Usage:
------
    from bizdash.main import app

    # Run with uvicorn
    uvicorn bizdash.main:app --reload
"""

__version__ = "1.0.0"
__all__ = ["__version__"]
