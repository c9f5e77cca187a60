from typing import Optional

from botocore.exceptions import ClientError


class CloudAdminError(Exception):
    """Base exception for all cloud admin errors.

    Errors raised at the gateway boundary record which API operation failed
    and on which table or bucket, so the CLI can print
    ``Scan on orders: Throttling - ...`` without parsing the message.

    Attributes:
        message: Human-readable error message
        original_error: The botocore exception that caused this error (if any)
        operation: API operation that failed (e.g., "Scan")
        resource_name: Table or bucket the operation targeted
    """

    def __init__(
        self,
        message: str,
        original_error: Optional[Exception] = None,
        operation: Optional[str] = None,
        resource_name: Optional[str] = None
    ):
        self.message = message
        self.original_error = original_error
        self.operation = operation
        self.resource_name = resource_name
        super().__init__(message)

    @property
    def error_code(self) -> Optional[str]:
        """Service error code of the underlying ClientError, if there was one."""
        if isinstance(self.original_error, ClientError):
            return self.original_error.response.get('Error', {}).get('Code')
        return None

    def __str__(self) -> str:
        if not self.operation:
            return self.message
        target = self.operation
        if self.resource_name:
            target += f" on {self.resource_name}"
        return f"{target}: {self.message}"
