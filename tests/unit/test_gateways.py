"""
Tests for the service gateways (core/).

These tests verify lazy client creation, the restartable page stream and
error mapping at the gateway boundary, using mocked boto3 clients.
"""

import pytest
from unittest.mock import Mock, patch
from botocore.exceptions import ClientError, EndpointConnectionError

from cloud_admin.core import (
    BucketGateway,
    TableGateway,
    build_projection_expression,
    create_table_gateway,
)
from cloud_admin.core.base_gateway import PageStream, api_operation_name
from cloud_admin.exceptions import ConnectionError, NotFoundError, ValidationError


def client_error(code: str, operation: str = 'Scan') -> ClientError:
    return ClientError({'Error': {'Code': code, 'Message': f'{code} happened'}}, operation)


@pytest.fixture
def mock_client():
    """Mock low-level boto3 client."""
    return Mock()


@pytest.fixture
def gateway(aws_config, mock_client):
    gateway = TableGateway(aws_config)
    gateway._client = mock_client
    return gateway


class TestClientCreation:
    """Test lazy client construction."""

    def test_initialization(self, aws_config):
        gateway = create_table_gateway(aws_config)

        assert gateway.config == aws_config
        assert gateway._client is None

    def test_client_lazy_initialization(self, aws_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session = Mock()
            mock_client = Mock()
            mock_session_class.return_value = mock_session
            mock_session.client.return_value = mock_client

            gateway = TableGateway(aws_config)
            first = gateway.client
            second = gateway.client

            assert first is second is mock_client
            mock_session_class.assert_called_once()
            args, kwargs = mock_session.client.call_args
            assert args == ('dynamodb',)
            assert 'endpoint_url' not in kwargs
            assert kwargs['config'].retries == {'max_attempts': 0}

    def test_endpoint_override_per_service(self, aws_config):
        config = aws_config.with_overrides(endpoint_url="http://localhost:4566")
        with patch('boto3.Session') as mock_session_class:
            mock_session = mock_session_class.return_value

            _ = BucketGateway(config).client

            args, kwargs = mock_session.client.call_args
            assert args == ('s3',)
            assert kwargs['endpoint_url'] == "http://localhost:4566"

    def test_client_creation_error(self, aws_config):
        with patch('boto3.Session') as mock_session_class:
            mock_session_class.side_effect = Exception("profile not found")

            gateway = TableGateway(aws_config)

            with pytest.raises(ConnectionError, match="Failed to connect to dynamodb"):
                _ = gateway.client


class TestPageStream:
    """Test lazy, restartable pagination."""

    def test_operation_name(self):
        assert api_operation_name('list_objects_v2') == 'ListObjectsV2'
        assert api_operation_name('scan') == 'Scan'

    def test_pages_are_fetched_lazily(self, gateway, mock_client):
        stream = gateway.scan_pages('orders')

        mock_client.get_paginator.assert_not_called()
        assert isinstance(stream, PageStream)

    def test_stream_is_restartable(self, gateway, mock_client):
        pages = [{'Items': [{'id': {'S': '1'}}]}, {'Items': []}]
        mock_client.get_paginator.return_value.paginate.side_effect = lambda **kw: iter(pages)

        stream = gateway.scan_pages('orders')

        assert list(stream) == pages
        assert list(stream) == pages
        assert mock_client.get_paginator.return_value.paginate.call_count == 2

    def test_page_error_is_mapped(self, gateway, mock_client):
        def failing_pages(**kwargs):
            yield {'Items': [{'id': {'S': '1'}}]}
            raise client_error('ResourceNotFoundException')

        mock_client.get_paginator.return_value.paginate.side_effect = failing_pages
        received = []

        with pytest.raises(NotFoundError) as exc_info:
            for page in gateway.scan_pages('orders'):
                received.append(page)

        assert len(received) == 1
        assert exc_info.value.resource_name == 'orders'
        assert 'Scan on orders' in str(exc_info.value)

    def test_transport_error_is_connection_error(self, gateway, mock_client):
        def unreachable(**kwargs):
            raise EndpointConnectionError(endpoint_url='http://localhost:1')
            yield  # pragma: no cover

        mock_client.get_paginator.return_value.paginate.side_effect = unreachable

        with pytest.raises(ConnectionError):
            list(gateway.scan_pages('orders'))


class TestTableGateway:
    """Test DynamoDB operations."""

    def test_projection_uses_placeholders(self):
        expression, names = build_projection_expression(['name', 'status'])

        assert expression == '#p0, #p1'
        assert names == {'#p0': 'name', '#p1': 'status'}

    def test_scan_without_projection(self, gateway, mock_client):
        mock_client.get_paginator.return_value.paginate.return_value = []

        list(gateway.scan_pages('orders'))

        mock_client.get_paginator.assert_called_once_with('scan')
        mock_client.get_paginator.return_value.paginate.assert_called_once_with(TableName='orders')

    def test_scan_with_projection(self, gateway, mock_client):
        mock_client.get_paginator.return_value.paginate.return_value = []

        list(gateway.scan_pages('orders', projection=['pk', 'sk']))

        mock_client.get_paginator.return_value.paginate.assert_called_once_with(
            TableName='orders',
            ProjectionExpression='#p0, #p1',
            ExpressionAttributeNames={'#p0': 'pk', '#p1': 'sk'}
        )

    def test_describe_table(self, gateway, mock_client):
        mock_client.describe_table.return_value = {'Table': {'TableName': 'orders'}}

        assert gateway.describe_table('orders') == {'TableName': 'orders'}
        mock_client.describe_table.assert_called_once_with(TableName='orders')

    def test_describe_table_without_table_section(self, gateway, mock_client):
        mock_client.describe_table.return_value = {}

        assert gateway.describe_table('orders') == {}

    def test_describe_missing_table(self, gateway, mock_client):
        mock_client.describe_table.side_effect = client_error('ResourceNotFoundException', 'DescribeTable')

        with pytest.raises(NotFoundError):
            gateway.describe_table('ghost')

    def test_get_item_absent(self, gateway, mock_client):
        mock_client.get_item.return_value = {}

        assert gateway.get_item('orders', {'pk': {'S': '1'}}) is None

    def test_get_item_validation_error(self, gateway, mock_client):
        mock_client.get_item.side_effect = client_error('ValidationException', 'GetItem')

        with pytest.raises(ValidationError):
            gateway.get_item('orders', {'wrong': {'S': '1'}})

    def test_update_item(self, gateway, mock_client):
        gateway.update_item(
            'orders',
            {'pk': {'S': '1'}},
            update_expression='SET #attr = :val',
            expression_attribute_values={':val': {'N': '5'}},
            expression_attribute_names={'#attr': 'total'}
        )

        mock_client.update_item.assert_called_once_with(
            TableName='orders',
            Key={'pk': {'S': '1'}},
            UpdateExpression='SET #attr = :val',
            ExpressionAttributeValues={':val': {'N': '5'}},
            ExpressionAttributeNames={'#attr': 'total'}
        )

    def test_delete_item(self, gateway, mock_client):
        gateway.delete_item('orders', {'pk': {'S': '1'}})

        mock_client.delete_item.assert_called_once_with(TableName='orders', Key={'pk': {'S': '1'}})


class TestBucketGateway:
    """Test S3 operations."""

    def test_list_buckets(self, aws_config):
        gateway = BucketGateway(aws_config)
        gateway._client = Mock()
        gateway._client.list_buckets.return_value = {'Buckets': [{'Name': 'a'}]}

        assert gateway.list_buckets() == [{'Name': 'a'}]

    def test_missing_bucket_maps_to_not_found(self, aws_config):
        gateway = BucketGateway(aws_config)
        gateway._client = Mock()

        def missing(**kwargs):
            raise client_error('NoSuchBucket', 'ListObjectsV2')
            yield  # pragma: no cover

        gateway._client.get_paginator.return_value.paginate.side_effect = missing

        with pytest.raises(NotFoundError) as exc_info:
            list(gateway.list_object_pages('ghost'))

        assert exc_info.value.resource_type == 'bucket'
