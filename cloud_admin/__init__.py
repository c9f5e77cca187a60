from .config import AwsConfig
from .exceptions import (
    CloudAdminError,
    ConflictError,
    ConnectionError,
    NotFoundError,
    RetryableError,
    ValidationError,
)
from .models import (
    AttributeDefinition,
    KeySchemaElement,
    KeyType,
    TableDescription,
)
from .core import (
    BucketGateway,
    TableGateway,
    create_bucket_gateway,
    create_table_gateway,
)
from .handlers import (
    BucketReadApi,
    TableReadApi,
    TableWriteApi,
)

__version__ = "1.0.0"
__all__ = [
    # Configuration
    "AwsConfig",

    # Exceptions
    "CloudAdminError",
    "ConflictError",
    "ConnectionError",
    "NotFoundError",
    "RetryableError",
    "ValidationError",

    # Models
    "AttributeDefinition",
    "KeySchemaElement",
    "KeyType",
    "TableDescription",

    # Gateways
    "BucketGateway",
    "TableGateway",
    "create_bucket_gateway",
    "create_table_gateway",

    # Read/write APIs
    "BucketReadApi",
    "TableReadApi",
    "TableWriteApi",
]
