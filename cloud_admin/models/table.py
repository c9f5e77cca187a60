"""
Table metadata models.

Built from a DescribeTable response on demand; never cached across runs.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class KeyType(str, Enum):
    """Role of an attribute in the primary key."""
    HASH = "HASH"
    RANGE = "RANGE"


class AttributeDefinition(BaseModel):
    """Declared type of a key or index attribute."""

    attribute_name: str = Field(..., alias="AttributeName")
    attribute_type: str = Field(..., alias="AttributeType", description="S, N or B")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class KeySchemaElement(BaseModel):
    """One attribute of the table's primary key."""

    attribute_name: str = Field(..., alias="AttributeName")
    key_type: KeyType = Field(..., alias="KeyType")

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class TableDescription(BaseModel):
    """Read-only view of a table's name, declared attributes and key schema."""

    table_name: str = Field(..., alias="TableName")
    table_status: Optional[str] = Field(None, alias="TableStatus")
    item_count: Optional[int] = Field(None, alias="ItemCount")
    attribute_definitions: List[AttributeDefinition] = Field(default_factory=list, alias="AttributeDefinitions")
    key_schema: List[KeySchemaElement] = Field(default_factory=list, alias="KeySchema")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_response(cls, table: Dict[str, Any], table_name: Optional[str] = None) -> 'TableDescription':
        """Build from the ``Table`` section of a DescribeTable response.

        Args:
            table: The ``Table`` mapping
            table_name: Name to use when the response omits it
        """
        data = dict(table)
        if table_name and 'TableName' not in data:
            data['TableName'] = table_name
        return cls.model_validate(data)

    @property
    def key_attributes(self) -> List[str]:
        """Key attribute names in declared order (partition key first)."""
        return [element.attribute_name for element in self.key_schema]
