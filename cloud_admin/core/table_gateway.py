"""
Thin DynamoDB Table Gateway

Forwards the handful of DynamoDB operations the CLI needs to the low-level
boto3 client. Items travel in the service's typed wire format
(``{'S': 'abc'}``, ``{'N': '42'}``, ...) so they can be printed exactly as
the service returns them and sent back unchanged as delete keys.

The gateway focuses on:
- Creating the boto3 DynamoDB client
- Paginated scans and table listings
- Point reads, updates and deletes by key
- Error mapping to domain exceptions
"""

import logging
from typing import Any, Dict, List, Optional

from ..config import AwsConfig
from .base_gateway import PageStream, ServiceGateway

logger = logging.getLogger(__name__)


def build_projection_expression(fields: List[str]) -> tuple[str, Dict[str, str]]:
    """Build a ProjectionExpression with placeholder names.

    Every attribute goes through ExpressionAttributeNames so reserved words
    (``name``, ``status``, ``data``) and dotted names are safe.

    Args:
        fields: Attribute names to project

    Returns:
        (projection_expression, expression_attribute_names)
    """
    names = {f"#p{i}": field for i, field in enumerate(fields)}
    return ", ".join(names), names


class TableGateway(ServiceGateway):
    """
    Thin gateway for DynamoDB operations.

    Unlike a per-table repository, one gateway serves every table; each
    operation takes the table name explicitly because the CLI addresses
    arbitrary tables chosen at run time.
    """

    service_name = 'dynamodb'
    resource_type = 'table'

    @property
    def endpoint_url(self) -> Optional[str]:
        return self.config.dynamodb_endpoint_url

    def describe_table(self, table_name: str) -> Dict[str, Any]:
        """
        Execute DescribeTable.

        Returns:
            The ``Table`` section of the response (empty dict if absent)

        Raises:
            NotFoundError: If the table does not exist
        """
        response = self.call("DescribeTable", self.client.describe_table, table_name, TableName=table_name)
        return response.get('Table') or {}

    def list_table_pages(self) -> PageStream:
        """Page through ListTables, following LastEvaluatedTableName."""
        return self.paginate('list_tables')

    def scan_pages(self, table_name: str, projection: Optional[List[str]] = None) -> PageStream:
        """
        Page through a full Scan of the table.

        No filter is applied; every item is visited once per walk, in the
        order the service returns them.

        Args:
            table_name: Table to scan
            projection: Attribute names to return (all attributes if None)

        Returns:
            PageStream of raw Scan responses
        """
        scan_kwargs: Dict[str, Any] = {'TableName': table_name}
        if projection:
            proj_expr, expr_names = build_projection_expression(projection)
            scan_kwargs['ProjectionExpression'] = proj_expr
            scan_kwargs['ExpressionAttributeNames'] = expr_names
        return self.paginate('scan', table_name, **scan_kwargs)

    def get_item(self, table_name: str, key: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Execute GetItem by exact primary key.

        Returns:
            The item, or None when no item has that key
        """
        response = self.call("GetItem", self.client.get_item, table_name, TableName=table_name, Key=key)
        return response.get('Item')

    def update_item(
        self,
        table_name: str,
        key: Dict[str, Any],
        update_expression: str,
        expression_attribute_values: Optional[Dict[str, Any]] = None,
        expression_attribute_names: Optional[Dict[str, str]] = None
    ) -> None:
        """
        Execute UpdateItem.

        Args:
            table_name: Target table
            key: Primary key of item to update
            update_expression: UPDATE expression
            expression_attribute_values: Values for update expression
            expression_attribute_names: Names for update expression
        """
        update_kwargs: Dict[str, Any] = {
            'TableName': table_name,
            'Key': key,
            'UpdateExpression': update_expression,
        }
        if expression_attribute_values:
            update_kwargs['ExpressionAttributeValues'] = expression_attribute_values
        if expression_attribute_names:
            update_kwargs['ExpressionAttributeNames'] = expression_attribute_names

        self.call("UpdateItem", self.client.update_item, table_name, **update_kwargs)
        logger.info(f"Updated item in {table_name}: {key}")

    def delete_item(self, table_name: str, key: Dict[str, Any]) -> None:
        """
        Execute DeleteItem by exact primary key.

        Deleting a key that does not exist is not an error.
        """
        self.call("DeleteItem", self.client.delete_item, table_name, TableName=table_name, Key=key)
        logger.info(f"Deleted item from {table_name}: {key}")


def create_table_gateway(config: AwsConfig) -> TableGateway:
    """
    Factory function to create a TableGateway instance.

    Args:
        config: AWS configuration

    Returns:
        Configured TableGateway instance
    """
    return TableGateway(config)
