from .table import (
    AttributeDefinition,
    KeySchemaElement,
    KeyType,
    TableDescription,
)

__all__ = [
    "AttributeDefinition",
    "KeySchemaElement",
    "KeyType",
    "TableDescription",
]
