"""Exceptions raised while declaring and translating query arguments."""

from typing import Any

from fastapi import HTTPException, status


class QueryKitError(Exception):
    """Base error carrying a stable error code.

    Example:
        raise QueryKitError(
            code="INVALID_FILTER_OPERATOR",
            message="Filter foo does not exist",
        )
    """

    code = "QUERYKIT_ERROR"

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize error.

        Args:
            message: Human-readable error message.
            code: Error code (defaults to the class code).
            details: Optional additional error details.
        """
        super().__init__(message)
        self.message = message
        self.code = code or self.code
        self.details = details


class InvalidOperatorError(QueryKitError, ValueError):
    """A filter argument was declared with an operator that is not registered."""

    code = "INVALID_FILTER_OPERATOR"

    def __init__(self, operator: Any, available: list[str] | None = None) -> None:
        details = {"operator": str(operator)}
        if available is not None:
            details["available"] = available
        super().__init__(f"Filter {operator} does not exist", details=details)
        self.operator = operator


class UnknownOperatorError(QueryKitError, LookupError):
    """An operator reached translation without being validated upstream."""

    code = "UNKNOWN_FILTER_OPERATOR"

    def __init__(self, operator: Any) -> None:
        super().__init__(
            f"Operator {operator} is not registered",
            details={"operator": str(operator)},
        )
        self.operator = operator


class OrderEnumNotInitializedError(QueryKitError, RuntimeError):
    """A sort input was declared before the shared order enum was created."""

    code = "ORDER_ENUM_NOT_INITIALIZED"

    def __init__(self) -> None:
        super().__init__(
            "Order enum is not initialized; call init_order_enum() at startup"
        )


class InvalidQueryArgumentsError(QueryKitError, ValueError):
    """The argument bundle does not have the expected shape."""

    code = "INVALID_QUERY_ARGUMENTS"


class APIException(HTTPException):
    """HTTP exception with the standard error envelope.

    Example:
        raise APIException(
            code="INVALID_QUERY_ARGUMENTS",
            message="Invalid query arguments",
            status_code=status.HTTP_400_BAD_REQUEST
        )
    """

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize API exception.

        Args:
            code: Error code (e.g., 'INVALID_QUERY_ARGUMENTS').
            message: Human-readable error message.
            status_code: HTTP status code (default: 400).
            details: Optional additional error details.
        """
        super().__init__(
            status_code=status_code,
            detail={"error": {"code": code, "message": message, "details": details}},
        )
        self.code = code
        self.message = message
        self.details = details


def to_api_exception(error: QueryKitError) -> APIException:
    """Convert a query error into an HTTP exception.

    Malformed client arguments map to 400; everything else is a server-side
    configuration problem and maps to 500.

    Args:
        error: Error raised by declaration or translation.

    Returns:
        APIException with the same code, message and details.
    """
    if isinstance(error, InvalidQueryArgumentsError):
        status_code = status.HTTP_400_BAD_REQUEST
    else:
        status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    return APIException(
        code=error.code,
        message=error.message,
        status_code=status_code,
        details=error.details,
    )
