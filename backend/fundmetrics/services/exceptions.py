# backend/fundmetrics/services/exceptions.py
"""
Service layer exceptions.

These exceptions represent domain-specific errors and contain NO HTTP knowledge.
The calling layer is responsible for mapping these to appropriate responses
(typically 4xx for everything in this module).

Pure metric functions never raise for empty or short series; they return
documented neutral values. Only precondition violations raise.

Exception Hierarchy:
    ServiceError (base)
    ├── ValidationError
    │   └── InvalidFundCountError
    └── AnalyticsError
        └── InsufficientDataError
"""


class ServiceError(Exception):
    """
    Base exception for all service layer errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# =============================================================================
# VALIDATION ERRORS
# =============================================================================


class ValidationError(ServiceError):
    """
    Raised when input validation fails.

    This is for programmatic validation errors (negative holding weights,
    non-positive NAVs, empty manager fund lists), NOT for request payload
    validation which is handled by Pydantic.

    Attributes:
        field: The field that failed validation (optional)
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class InvalidFundCountError(ValidationError):
    """
    Raised when a multi-fund analysis receives too few or too many funds.

    Attributes:
        count: Number of funds supplied
        minimum: Minimum accepted
        maximum: Maximum accepted
    """

    def __init__(self, count: int, minimum: int, maximum: int) -> None:
        self.count = count
        self.minimum = minimum
        self.maximum = maximum
        if count < minimum:
            message = f"At least {minimum} funds are required, got {count}"
        else:
            message = f"Maximum {maximum} funds can be compared at once, got {count}"
        super().__init__(message, field="funds")


# =============================================================================
# ANALYTICS ERRORS
# =============================================================================


class AnalyticsError(ServiceError):
    """
    Base exception for analytics calculation errors.
    """
    pass


class InsufficientDataError(AnalyticsError):
    """
    Raised when a calculation needs more history than was supplied.

    Attributes:
        required: Minimum number of data points needed
        available: Number of data points supplied
        operation: Name of the calculation that was refused
    """

    def __init__(self, required: int, available: int, operation: str) -> None:
        self.required = required
        self.available = available
        self.operation = operation
        super().__init__(
            f"Insufficient historical data for {operation}. "
            f"At least {required} data points required, found {available}."
        )


__all__ = [
    # Base
    "ServiceError",
    # Validation
    "ValidationError",
    "InvalidFundCountError",
    # Analytics
    "AnalyticsError",
    "InsufficientDataError",
]
