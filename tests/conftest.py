"""
Test configuration and fixtures for cloud_admin.

Provides configuration, moto-backed AWS clients and sample tables/buckets.
"""

import io

import boto3
import pytest
from moto import mock_aws

from cloud_admin import AwsConfig

REGION = "us-east-1"


@pytest.fixture
def aws_env(monkeypatch):
    """Fake credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_REGION", REGION)
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    for name in ("AWS_PROFILE", "DYNAMODB_ENDPOINT_URL", "S3_ENDPOINT_URL",
                 "CLOUD_ADMIN_RETRIES", "CLOUD_ADMIN_TIMEOUT", "CLOUD_ADMIN_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def aws_config(aws_env):
    """Configuration for mocked testing."""
    return AwsConfig(
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
        aws_session_token="testing",
        region_name=REGION,
        profile_name=None,
        dynamodb_endpoint_url=None,
        s3_endpoint_url=None,
        retries=0
    )


@pytest.fixture
def mocked_aws(aws_env):
    """Activate moto for the duration of a test."""
    with mock_aws():
        yield


@pytest.fixture
def dynamodb_client(mocked_aws):
    return boto3.client("dynamodb", region_name=REGION)


@pytest.fixture
def s3_client(mocked_aws):
    return boto3.client("s3", region_name=REGION)


@pytest.fixture
def orders_table(dynamodb_client):
    """Table with a composite key (customer_id, order_id)."""
    dynamodb_client.create_table(
        TableName="orders",
        KeySchema=[
            {"AttributeName": "customer_id", "KeyType": "HASH"},
            {"AttributeName": "order_id", "KeyType": "RANGE"},
        ],
        AttributeDefinitions=[
            {"AttributeName": "customer_id", "AttributeType": "S"},
            {"AttributeName": "order_id", "AttributeType": "S"},
        ],
        BillingMode="PAY_PER_REQUEST",
    )
    return "orders"


@pytest.fixture
def users_table(dynamodb_client):
    """Table with a single partition key named with a reserved word."""
    dynamodb_client.create_table(
        TableName="users",
        KeySchema=[{"AttributeName": "name", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "name", "AttributeType": "S"}],
        BillingMode="PAY_PER_REQUEST",
    )
    return "users"


@pytest.fixture
def sample_orders(dynamodb_client, orders_table):
    """Five orders across two customers, with uneven attributes."""
    items = [
        {"customer_id": {"S": "c1"}, "order_id": {"S": "o1"}, "total": {"N": "10.5"}},
        {"customer_id": {"S": "c1"}, "order_id": {"S": "o2"}, "total": {"N": "3"}, "note": {"S": 'say "hi"\nbye'}},
        {"customer_id": {"S": "c2"}, "order_id": {"S": "o1"}, "paid": {"BOOL": True}},
        {"customer_id": {"S": "c2"}, "order_id": {"S": "o2"}, "tags": {"SS": ["b", "a"]}},
        {"customer_id": {"S": "c2"}, "order_id": {"S": "o3"}, "note": {"S": "tab\there"}},
    ]
    for item in items:
        dynamodb_client.put_item(TableName=orders_table, Item=item)
    return items


@pytest.fixture
def assets_bucket(s3_client):
    s3_client.create_bucket(Bucket="assets")
    for key in ("a.txt", "b/c.txt", "d.bin"):
        s3_client.put_object(Bucket="assets", Key=key, Body=b"x")
    return "assets"


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def err():
    return io.StringIO()
