"""
Table Read API

Read-side DynamoDB operations behind the CLI:
- table description and listing
- the full-table scan pipeline (verbose, CSV, TSV)
- point existence checks by key

A scan always walks the whole table with no filter. Pages are pulled one at a
time; verbose output streams as each page arrives, while CSV/TSV buffer every
item first because the header row is the union of all attribute names.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional, TextIO

from ...config import AwsConfig
from ...core import create_table_gateway
from ...exceptions import NotFoundError
from ...models import TableDescription
from ...render import RENDERERS, write_verbose_item

logger = logging.getLogger(__name__)


def table_not_found_message(table_name: str) -> str:
    return f"Table '{table_name}' not found."


def table_no_metadata_message(table_name: str) -> str:
    return f"Table {table_name} not found or has no metadata."


class TableReadApi:
    """
    Read-only API for DynamoDB tables.

    Methods that print take an ``out`` stream and report a missing table as
    a message rather than an error; the plain data methods raise
    ``NotFoundError``.
    """

    def __init__(self, config: AwsConfig):
        """Initialize read API with configuration."""
        self.config = config
        self.gateway = create_table_gateway(config)

    def describe(self, table_name: str) -> TableDescription:
        """
        Fetch the table's description.

        DynamoDB Operation: DescribeTable

        Raises:
            NotFoundError: If the table does not exist or the response
                carries no table metadata
        """
        table = self.gateway.describe_table(table_name)
        if not table:
            raise NotFoundError(
                table_no_metadata_message(table_name),
                resource_name=table_name,
                operation="DescribeTable"
            )
        return TableDescription.from_response(table, table_name)

    def list_table_names(self) -> List[str]:
        """All table names in the account and region, across every page."""
        names: List[str] = []
        for page in self.gateway.list_table_pages():
            names.extend(page.get('TableNames', []))
        return names

    def iter_items(self, table_name: str, projection: Optional[List[str]] = None) -> Iterator[Dict[str, Any]]:
        """
        Yield every item of the table in service order.

        DynamoDB Operation: Scan, paginated by LastEvaluatedKey

        Args:
            table_name: Table to scan
            projection: Attribute names to return (all if None)

        Raises:
            NotFoundError: If the table does not exist
        """
        for page in self.gateway.scan_pages(table_name, projection):
            items = page.get('Items', [])
            if not items:
                continue
            yield from items

    def item_exists(self, table_name: str, key: Dict[str, Any]) -> bool:
        """
        Check whether an item with exactly this key exists.

        DynamoDB Operation: GetItem
        """
        return self.gateway.get_item(table_name, key) is not None

    # ------------------------------------------------------------------
    # Console output
    # ------------------------------------------------------------------

    def print_description(self, table_name: str, out: TextIO) -> bool:
        """Print attribute definitions and key schema.

        Returns:
            False if the table does not exist or has no metadata
        """
        try:
            table = self.gateway.describe_table(table_name)
        except NotFoundError:
            print(table_not_found_message(table_name), file=out)
            return False
        if not table:
            print(table_no_metadata_message(table_name), file=out)
            return False

        description = TableDescription.from_response(table, table_name)
        print(f"\nDynamoDB table: {table_name}", file=out)
        if description.attribute_definitions:
            print("AttributeDefinitions:", file=out)
            for attr in description.attribute_definitions:
                print(f"  - name: {attr.attribute_name}, type: {attr.attribute_type}", file=out)
        if description.key_schema:
            print("KeySchema:", file=out)
            for element in description.key_schema:
                print(f"  - name: {element.attribute_name}, key_type: {element.key_type.value}", file=out)
        return True

    def print_tables(self, out: TextIO) -> int:
        """Print every table name.

        Returns:
            Number of tables listed
        """
        names = self.list_table_names()
        if not names:
            print("No DynamoDB tables found.", file=out)
            return 0
        print("DynamoDB tables:", file=out)
        for name in names:
            print(f"  {name}", file=out)
        return len(names)

    def scan_table(self, table_name: str, out: TextIO) -> int:
        """
        Stream every item as a verbose block.

        Items already printed stay printed if a later page fails.

        Returns:
            Number of items printed (0 if the table does not exist)
        """
        count = 0
        try:
            for item in self.iter_items(table_name):
                write_verbose_item(item, out)
                count += 1
        except NotFoundError:
            print(table_not_found_message(table_name), file=out)
        return count

    def scan_table_delimited(self, table_name: str, fmt: str, out: TextIO) -> int:
        """
        Scan the whole table, then write it as CSV or TSV.

        Nothing is written until the scan completes.

        Args:
            table_name: Table to scan
            fmt: 'csv' or 'tsv'
            out: Output stream

        Returns:
            Number of rows written (0 if the table does not exist)
        """
        renderer = RENDERERS[fmt]
        try:
            items = list(self.iter_items(table_name))
        except NotFoundError:
            print(table_not_found_message(table_name), file=out)
            return 0
        logger.debug(f"Scanned {len(items)} item(s) from {table_name}")
        return renderer(items, out)

    def scan_table_csv(self, table_name: str, out: TextIO) -> int:
        return self.scan_table_delimited(table_name, 'csv', out)

    def scan_table_tsv(self, table_name: str, out: TextIO) -> int:
        return self.scan_table_delimited(table_name, 'tsv', out)
