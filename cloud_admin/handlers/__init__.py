"""
Command handlers, split into read (queries) and write (commands) APIs.

- tables: DynamoDB describe, list, scan, item checks, bulk delete, attribute set
- buckets: S3 bucket and object listings
"""

from .buckets import BucketReadApi
from .tables import TableReadApi, TableWriteApi

__all__ = [
    "BucketReadApi",
    "TableReadApi",
    "TableWriteApi",
]
