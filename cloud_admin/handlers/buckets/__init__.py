from .queries import BucketReadApi

__all__ = ["BucketReadApi"]
