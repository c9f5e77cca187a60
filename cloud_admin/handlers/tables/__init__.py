from .commands import TableWriteApi
from .queries import TableReadApi

__all__ = [
    "TableReadApi",
    "TableWriteApi",
]
