"""
Table Write API

Write-side DynamoDB operations behind the CLI:
- bulk delete of every item in a table
- setting one attribute on one item

Each write is an independent point operation. There is no batching and no
transaction, so a failure part way through a bulk delete leaves the table
partially emptied.
"""

import logging
from typing import Any, Dict, TextIO

from ...config import AwsConfig
from ...core import create_table_gateway
from ...exceptions import NotFoundError
from ...models import TableDescription
from ...utils import extract_key, infer_attribute_value

logger = logging.getLogger(__name__)

ATTRIBUTE_PLACEHOLDER = '#attr'
VALUE_PLACEHOLDER = ':val'


class TableWriteApi:
    """Write-only API for DynamoDB tables."""

    def __init__(self, config: AwsConfig):
        """Initialize write API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config)

    def delete_all(self, table_name: str, out: TextIO) -> int:
        """
        Delete every item in the table.

        DynamoDB Operations: DescribeTable, Scan projected to the key
        attributes, then one DeleteItem per scanned item.

        Scanned items lacking any key attribute are skipped and reported.
        Concurrent writers may cause items to be missed.

        Args:
            table_name: Table to empty
            out: Stream for progress messages

        Returns:
            Number of items deleted
        """
        try:
            table = self.gateway.describe_table(table_name)
        except NotFoundError:
            print(f"Table '{table_name}' not found.", file=out)
            return 0
        if not table:
            print(f"Table {table_name} not found or has no metadata.", file=out)
            return 0

        description = TableDescription.from_response(table, table_name)
        key_attributes = description.key_attributes
        if not key_attributes:
            print(f"Table '{table_name}' has no key schema.", file=out)
            return 0

        deleted = 0
        for page in self.gateway.scan_pages(table_name, projection=key_attributes):
            for item in page.get('Items', []):
                key = extract_key(item, key_attributes)
                if key is None:
                    logger.warning(f"Skipping item in {table_name} missing full key {key_attributes}: {item}")
                    print(f"Skipping item missing full key: {item}", file=out)
                    continue
                self.gateway.delete_item(table_name, key)
                deleted += 1

        logger.info(f"Deleted {deleted} item(s) from {table_name}")
        return deleted

    def set_attribute(self, table_name: str, key: Dict[str, Any], attribute_name: str, value: Dict[str, Any]) -> None:
        """
        Set one attribute on the item with this key.

        DynamoDB Operation: UpdateItem with ``SET #attr = :val``. The name and
        value go through expression placeholders so reserved words work. The
        item is created if the key does not exist yet.

        Args:
            table_name: Target table
            key: Full primary key of the item
            attribute_name: Attribute to set
            value: Typed attribute value
        """
        self.gateway.update_item(
            table_name,
            key,
            update_expression=f"SET {ATTRIBUTE_PLACEHOLDER} = {VALUE_PLACEHOLDER}",
            expression_attribute_names={ATTRIBUTE_PLACEHOLDER: attribute_name},
            expression_attribute_values={VALUE_PLACEHOLDER: value}
        )

    def set_attribute_from_text(self, table_name: str, key: Dict[str, Any], attribute_name: str, text: str) -> Dict[str, Any]:
        """Set an attribute from command-line text, inferring its type.

        Returns:
            The typed value that was written
        """
        value = infer_attribute_value(text)
        self.set_attribute(table_name, key, attribute_name, value)
        return value
