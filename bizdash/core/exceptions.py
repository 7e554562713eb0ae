# ==============================================================================
# CUSTOM EXCEPTIONS - Application Error Hierarchy
# ==============================================================================
# Structured exception classes for consistent error handling
# Each exception maps to an HTTP status code through the app handlers
# ==============================================================================

from __future__ import annotations

from typing import Any, Dict, List, Optional


class AppException(Exception):
    """
    Base exception for all application errors.

    Provides a consistent interface for error handling with:
    - Error code for programmatic identification
    - HTTP status code mapping
    - Detailed message and optional context

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error identifier
        status_code: HTTP status code to return
        details: Additional context dictionary

    Example:
        >>> raise AppException(
        ...     message="Something went wrong",
        ...     error_code="INTERNAL_ERROR",
        ...     status_code=500
        ... )
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        error_code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format for JSON response.

        Returns:
            Dictionary containing error details
        """
        return {
            "success": False,
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"status_code={self.status_code})"
        )


# ==============================================================================
# DATABASE EXCEPTIONS
# ==============================================================================

class DatabaseError(AppException):
    """
    Transient I/O failure talking to the document store.

    Raised when the driver reports:
    - Connection or server selection issues
    - Query execution failures

    Maps to HTTP 503. Callers may retry; nothing retries automatically.
    """

    def __init__(
        self,
        message: str = "Database operation failed",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="DATABASE_ERROR",
            status_code=503,
            details=details,
        )


# ==============================================================================
# RESOURCE EXCEPTIONS
# ==============================================================================

class NotFoundError(AppException):
    """
    Raised when a requested resource does not exist.

    Maps to HTTP 404 Not Found.

    Attributes:
        resource_type: Type of resource that was not found
        resource_id: Identifier of the missing resource
    """

    def __init__(
        self,
        message: str = "Resource not found",
        resource_type: Optional[str] = None,
        resource_id: Optional[Any] = None,
    ) -> None:
        details = {}
        if resource_type:
            details["resource_type"] = resource_type
        if resource_id:
            details["resource_id"] = str(resource_id)

        super().__init__(
            message=message,
            error_code="NOT_FOUND",
            status_code=404,
            details=details,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class AlreadyExistsError(AppException):
    """
    Raised when a write collides with a unique constraint.

    Maps to HTTP 409 Conflict.
    """

    def __init__(
        self,
        message: str = "Resource already exists",
        resource_type: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if resource_type:
            _details["resource_type"] = resource_type

        super().__init__(
            message=message,
            error_code="ALREADY_EXISTS",
            status_code=409,
            details=_details,
        )


# ==============================================================================
# VALIDATION EXCEPTIONS
# ==============================================================================

class ValidationError(AppException):
    """
    Raised when input validation fails before any write.

    Maps to HTTP 422 Unprocessable Entity.
    Contains field-level validation errors.
    """

    def __init__(
        self,
        message: str = "Validation error",
        errors: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=422,
            details={"validation_errors": errors or {}},
        )
        self.errors = errors or {}


# ==============================================================================
# BUSINESS LOGIC EXCEPTIONS
# ==============================================================================

class BusinessRuleError(AppException):
    """
    Raised when a business rule is violated.

    Maps to HTTP 400 Bad Request.
    """

    def __init__(
        self,
        message: str = "Business rule violation",
        rule: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        _details = details or {}
        if rule:
            _details["violated_rule"] = rule

        super().__init__(
            message=message,
            error_code="BUSINESS_RULE_ERROR",
            status_code=400,
            details=_details,
        )


class InsufficientStockError(BusinessRuleError):
    """
    Raised when an order requests more units than a product has in stock.

    Every shortfall found in the order is reported at once.
    """

    def __init__(self, issues: List[Dict[str, Any]]) -> None:
        names = ", ".join(issue["name"] for issue in issues)
        super().__init__(
            message=f"Insufficient stock for: {names}",
            rule="quantity_within_stock",
            details={"stock_issues": issues},
        )
        self.error_code = "INSUFFICIENT_STOCK"
        self.issues = issues


# ==============================================================================
# FULFILLMENT EXCEPTIONS
# ==============================================================================

class OrderInFlightError(AppException):
    """
    Raised when a fulfillment is already running for the same order.

    Maps to HTTP 409 Conflict.
    """

    def __init__(self, order_id: str) -> None:
        super().__init__(
            message=f"Order {order_id} is already being fulfilled",
            error_code="ORDER_IN_FLIGHT",
            status_code=409,
            details={"order_id": order_id},
        )
        self.order_id = order_id


class OrderAlreadyFulfilledError(AppException):
    """
    Raised when an order has already been turned into an invoice.

    Maps to HTTP 409 Conflict.
    """

    def __init__(
        self,
        order_id: str,
        invoice_id: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {"order_id": order_id}
        if invoice_id:
            details["invoice_id"] = invoice_id

        super().__init__(
            message=f"Order {order_id} has already been fulfilled",
            error_code="ORDER_ALREADY_FULFILLED",
            status_code=409,
            details=details,
        )
        self.order_id = order_id
        self.invoice_id = invoice_id


class FulfillmentError(AppException):
    """
    Raised when a critical step of order fulfillment fails.

    The order is left Pending. ``invoice_id`` is set when the invoice was
    persisted before the failure and was not removed afterwards.

    Attributes:
        step: Name of the failing step
        cause: Underlying exception
    """

    def __init__(
        self,
        order_id: str,
        step: str,
        cause: BaseException,
        invoice_id: Optional[str] = None,
    ) -> None:
        details: Dict[str, Any] = {
            "order_id": order_id,
            "step": step,
            "cause": str(cause),
        }
        if invoice_id:
            details["invoice_id"] = invoice_id

        super().__init__(
            message=f"Fulfillment of order {order_id} failed at step '{step}'",
            error_code="FULFILLMENT_FAILED",
            status_code=500,
            details=details,
        )
        self.order_id = order_id
        self.step = step
        self.cause = cause
        self.invoice_id = invoice_id
