"""
Bucket Read API

Lists buckets and the object keys inside a bucket.
"""

import logging
from typing import Iterator, List, Optional, TextIO

from ...config import AwsConfig
from ...core import create_bucket_gateway

logger = logging.getLogger(__name__)


class BucketReadApi:
    """Read-only API for S3 listings."""

    def __init__(self, config: AwsConfig):
        self.config = config
        self.gateway = create_bucket_gateway(config)

    def bucket_names(self) -> List[Optional[str]]:
        """Names of every bucket owned by the caller."""
        return [bucket.get('Name') for bucket in self.gateway.list_buckets()]

    def iter_object_keys(self, bucket: str) -> Iterator[Optional[str]]:
        """
        Yield every object key in the bucket, across all pages.

        Raises:
            NotFoundError: If the bucket does not exist
        """
        for page in self.gateway.list_object_pages(bucket):
            for obj in page.get('Contents', []):
                yield obj.get('Key')

    def list_buckets(self, out: TextIO) -> int:
        """Print one bucket name per line.

        Returns:
            Number of buckets
        """
        names = self.bucket_names()
        if not names:
            print("No S3 buckets found.", file=out)
            return 0
        for name in names:
            print(name if name is not None else "(no name)", file=out)
        return len(names)

    def list_objects(self, bucket: str, out: TextIO) -> int:
        """Print one object key per line.

        Returns:
            Number of objects
        """
        count = 0
        for key in self.iter_object_keys(bucket):
            print(key if key is not None else "(no key)", file=out)
            count += 1
        logger.debug(f"Listed {count} object(s) in {bucket}")
        return count
