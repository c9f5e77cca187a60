"""
Domain exceptions raised by the service gateways.

Every botocore failure that reaches a handler has been converted into one of
these, so callers branch on exception type instead of inspecting error text.
"""

from typing import Optional

from .base import CloudAdminError


class ValidationError(CloudAdminError):
    """Raised when a request is rejected as malformed.

    Used for:
    - ValidationException from DynamoDB (bad key shape, bad expression)
    - Locally rejected input such as an empty item key
    """


class NotFoundError(CloudAdminError):
    """Raised when a table or bucket does not exist.

    The CLI treats this as a normal outcome for describe and scan commands.
    """

    def __init__(
        self,
        message: str,
        resource_type: str = 'table',
        resource_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
        operation: Optional[str] = None
    ):
        self.resource_type = resource_type
        super().__init__(message, original_error, operation, resource_name)


class ConflictError(CloudAdminError):
    """Raised when the service refuses an operation because of current state.

    Used for:
    - ConditionalCheckFailedException
    - ResourceInUseException (table being created, updated or deleted)
    """


class ConnectionError(CloudAdminError):
    """Raised when the service cannot be reached or refuses the caller.

    Used for:
    - Missing or expired credentials
    - Authentication/authorization failures
    - Unreachable or invalid endpoints
    - Unrecognized service error codes
    """


class RetryableError(CloudAdminError):
    """Raised for throttling and transient service failures.

    Nothing in this tool retries on its own; botocore's configured retries
    have already been spent when this surfaces.
    """
