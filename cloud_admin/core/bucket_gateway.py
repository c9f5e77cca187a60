"""
Thin S3 Bucket Gateway

Read-only access to bucket and object listings through the low-level boto3
S3 client.
"""

import logging
from typing import Any, Dict, List, Optional

from ..config import AwsConfig
from .base_gateway import PageStream, ServiceGateway

logger = logging.getLogger(__name__)


class BucketGateway(ServiceGateway):
    """Thin gateway for S3 listing operations."""

    service_name = 's3'
    resource_type = 'bucket'

    @property
    def endpoint_url(self) -> Optional[str]:
        return self.config.s3_endpoint_url

    def list_buckets(self) -> List[Dict[str, Any]]:
        """
        Execute ListBuckets.

        Returns:
            Bucket entries as returned by the service
        """
        response = self.call("ListBuckets", self.client.list_buckets)
        return response.get('Buckets', [])

    def list_object_pages(self, bucket: str) -> PageStream:
        """
        Page through ListObjectsV2 for a bucket.

        Raises:
            NotFoundError: While iterating, if the bucket does not exist
        """
        return self.paginate('list_objects_v2', bucket, Bucket=bucket)


def create_bucket_gateway(config: AwsConfig) -> BucketGateway:
    """Factory function to create a BucketGateway instance."""
    return BucketGateway(config)
