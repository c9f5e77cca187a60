"""
Shared plumbing for the service gateways.

A gateway owns one lazily created boto3 client and converts every botocore
failure into a domain exception from ``cloud_admin.exceptions``. Errors are
classified by the structured ``Error.Code`` carried on ``ClientError``, never
by matching message text.
"""

import logging
from typing import Any, Callable, Dict, Iterator, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from ..config import AwsConfig
from ..exceptions import (
    ConflictError,
    ConnectionError,
    NotFoundError,
    RetryableError,
    ValidationError,
)

logger = logging.getLogger(__name__)

NOT_FOUND_CODES = {
    'ResourceNotFoundException',
    'TableNotFoundException',
    'NoSuchBucket',
    'NoSuchKey',
}

CONFLICT_CODES = {
    'ConditionalCheckFailedException',
    'ResourceInUseException',
    'TransactionConflictException',
}

VALIDATION_CODES = {
    'ValidationException',
    'InvalidBucketName',
    'ItemCollectionSizeLimitExceededException',
    'LimitExceededException',
}

THROTTLING_CODES = {
    'ProvisionedThroughputExceededException',
    'RequestLimitExceeded',
    'ThrottlingException',
    'SlowDown',
    'RequestThrottledException',
    'TooManyRequestsException',
}

UNAVAILABLE_CODES = {
    'InternalServerError',
    'InternalError',
    'ServiceUnavailable',
    'ServiceUnavailableException',
    'RequestTimeoutException',
}

AUTH_CODES = {
    'UnrecognizedClientException',
    'AccessDeniedException',
    'AccessDenied',
    'InvalidAccessKeyId',
    'SignatureDoesNotMatch',
    'InvalidSignatureException',
    'IncompleteSignatureException',
    'ExpiredToken',
    'ExpiredTokenException',
}


def map_client_error(
    error: ClientError,
    operation: str,
    resource_name: Optional[str] = None,
    resource_type: str = 'table'
) -> Exception:
    """Map a botocore ClientError to a domain exception.

    Args:
        error: The botocore ClientError
        operation: The operation that failed (e.g., "Scan", "ListObjectsV2")
        resource_name: Table or bucket the operation targeted
        resource_type: 'table' or 'bucket'

    Returns:
        Appropriate domain exception
    """
    error_info = error.response.get('Error', {})
    error_code = error_info.get('Code', 'Unknown')
    error_message = error_info.get('Message', str(error))

    source = {'original_error': error, 'operation': operation, 'resource_name': resource_name}

    if error_code in NOT_FOUND_CODES:
        return NotFoundError(
            f"{resource_type.capitalize()} not found - {error_message}",
            resource_type=resource_type,
            **source
        )

    if error_code in CONFLICT_CODES:
        return ConflictError(f"Conflict ({error_code}) - {error_message}", **source)

    if error_code in VALIDATION_CODES:
        return ValidationError(f"Validation failed - {error_message}", **source)

    if error_code in THROTTLING_CODES:
        return RetryableError(f"Throttling - {error_message}", **source)

    if error_code in UNAVAILABLE_CODES:
        return RetryableError(f"Service unavailable - {error_message}", **source)

    if error_code in AUTH_CODES:
        return ConnectionError(f"Authentication/authorization failed - {error_message}", **source)

    logger.warning(f"Unknown error code '{error_code}' from {operation} mapped to ConnectionError")
    return ConnectionError(f"Unrecognized error ({error_code}) - {error_message}", **source)


def api_operation_name(method_name: str) -> str:
    """Convert a boto3 method name to its API name (list_objects_v2 -> ListObjectsV2)."""
    return "".join(part.capitalize() for part in method_name.split("_"))


class PageStream:
    """
    Restartable, finite lazy sequence of response pages.

    Each iteration starts a new paginated request from the first page, so a
    PageStream can be walked more than once. Pages are fetched only as the
    caller pulls them; a failing page fetch raises the mapped domain error
    at that point.
    """

    def __init__(self, gateway: 'ServiceGateway', operation_name: str, resource_name: Optional[str], **kwargs):
        self.gateway = gateway
        self.operation_name = operation_name
        self.resource_name = resource_name
        self.kwargs = kwargs

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        operation = api_operation_name(self.operation_name)
        paginator = self.gateway.client.get_paginator(self.operation_name)
        try:
            for page in paginator.paginate(**self.kwargs):
                yield page
        except ClientError as e:
            raise self.gateway.map_error(e, operation, self.resource_name) from e
        except BotoCoreError as e:
            raise ConnectionError(str(e), e, operation, self.resource_name) from e


class ServiceGateway:
    """
    Thin gateway over one boto3 service client.

    Subclasses set ``service_name`` and ``resource_type`` and expose only the
    operations the CLI needs.
    """

    service_name: str = ''
    resource_type: str = 'resource'

    def __init__(self, config: AwsConfig):
        """Initialize gateway.

        Args:
            config: AWS connection configuration
        """
        self.config = config
        self._client = None

    @property
    def endpoint_url(self) -> Optional[str]:
        return None

    @property
    def client(self):
        """Lazy initialization of the boto3 client."""
        if self._client is None:
            try:
                session = boto3.Session(
                    aws_access_key_id=self.config.aws_access_key_id,
                    aws_secret_access_key=self.config.aws_secret_access_key,
                    aws_session_token=self.config.aws_session_token,
                    region_name=self.config.region_name,
                    profile_name=self.config.profile_name
                )

                client_kwargs = {}
                if self.endpoint_url:
                    client_kwargs['endpoint_url'] = self.endpoint_url

                client_kwargs['config'] = Config(
                    retries={'max_attempts': self.config.retries},
                    max_pool_connections=self.config.max_pool_connections,
                    read_timeout=self.config.timeout_seconds,
                    connect_timeout=self.config.timeout_seconds
                )

                self._client = session.client(self.service_name, **client_kwargs)
            except Exception as e:
                logger.error(f"Failed to create {self.service_name} client: {e}")
                raise ConnectionError(f"Failed to connect to {self.service_name}: {e}", e) from e
        return self._client

    def map_error(self, error: ClientError, operation: str, resource_name: Optional[str] = None) -> Exception:
        return map_client_error(error, operation, resource_name, self.resource_type)

    def call(self, operation: str, method: Callable[..., Dict[str, Any]], resource_name: Optional[str] = None, **kwargs) -> Dict[str, Any]:
        """Invoke one client method, mapping botocore failures.

        Args:
            operation: API operation name used in error messages
            method: Bound client method to invoke
            resource_name: Table or bucket for error context
            **kwargs: Request parameters

        Returns:
            Raw service response
        """
        try:
            return method(**kwargs)
        except ClientError as e:
            raise self.map_error(e, operation, resource_name) from e
        except BotoCoreError as e:
            raise ConnectionError(str(e), e, operation, resource_name) from e

    def paginate(self, operation_name: str, resource_name: Optional[str] = None, **kwargs) -> PageStream:
        """
        Lazily page through a paginated operation.

        Args:
            operation_name: boto3 paginator name (e.g., 'scan')
            resource_name: Table or bucket for error context
            **kwargs: Request parameters passed to every page request

        Returns:
            PageStream over raw response pages
        """
        return PageStream(self, operation_name, resource_name, **kwargs)
