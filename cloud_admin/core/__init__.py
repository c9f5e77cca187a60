"""
Core infrastructure components for AWS operations.

This module contains the foundational components used by every handler:
- TableGateway: Thin wrapper over the boto3 DynamoDB client
- BucketGateway: Thin wrapper over the boto3 S3 client
- map_client_error: botocore error to domain exception mapping
"""

from .base_gateway import PageStream, ServiceGateway, map_client_error
from .bucket_gateway import BucketGateway, create_bucket_gateway
from .table_gateway import TableGateway, build_projection_expression, create_table_gateway

__all__ = [
    "BucketGateway",
    "PageStream",
    "ServiceGateway",
    "TableGateway",
    "build_projection_expression",
    "create_bucket_gateway",
    "create_table_gateway",
    "map_client_error",
]
