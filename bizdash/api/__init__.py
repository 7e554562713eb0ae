# ==============================================================================
# API PACKAGE INITIALIZATION
# ==============================================================================

"""
API Module
==========

FastAPI routers and endpoint definitions:
- Dependencies: Database access, app-scoped state, services
- Routers: Clients, Products, Orders, Invoices, Dashboard
"""

from bizdash.api.router import api_router

__all__ = ["api_router"]
