import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file if it exists
load_dotenv()


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() == "true"


class AwsConfig(BaseModel):
    """Configuration for the S3 and DynamoDB clients."""

    region_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_REGION") or os.getenv("AWS_DEFAULT_REGION"),
        description="AWS region name (resolved by boto3 when unset)"
    )

    profile_name: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_PROFILE"),
        description="Named profile from the shared AWS config files"
    )

    aws_access_key_id: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_ACCESS_KEY_ID"),
        description="AWS access key ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SECRET_ACCESS_KEY"),
        description="AWS secret access key"
    )

    aws_session_token: Optional[str] = Field(
        default_factory=lambda: os.getenv("AWS_SESSION_TOKEN"),
        description="AWS session token for temporary credentials"
    )

    # Endpoint overrides (LocalStack, DynamoDB Local, MinIO)
    dynamodb_endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("DYNAMODB_ENDPOINT_URL"),
        description="DynamoDB endpoint URL (for local development)"
    )

    s3_endpoint_url: Optional[str] = Field(
        default_factory=lambda: os.getenv("S3_ENDPOINT_URL"),
        description="S3 endpoint URL (for local development)"
    )

    # Connection settings
    max_pool_connections: int = Field(
        default=10,
        description="Maximum number of connections in the connection pool"
    )

    retries: int = Field(
        default_factory=lambda: int(os.getenv("CLOUD_ADMIN_RETRIES", "3")),
        description="Number of botocore retry attempts for failed requests"
    )

    timeout_seconds: float = Field(
        default_factory=lambda: float(os.getenv("CLOUD_ADMIN_TIMEOUT", "30")),
        description="Connect and read timeout in seconds"
    )

    # Logging settings
    enable_debug_logging: bool = Field(
        default_factory=lambda: _env_flag("CLOUD_ADMIN_DEBUG"),
        description="Enable debug logging"
    )

    @field_validator('retries')
    @classmethod
    def validate_retries(cls, v):
        """Validate retry count."""
        if v < 0:
            raise ValueError("retries must be zero or greater")
        return v

    @field_validator('timeout_seconds')
    @classmethod
    def validate_timeout(cls, v):
        """Validate timeout."""
        if v <= 0:
            raise ValueError("timeout_seconds must be positive")
        return v

    @classmethod
    def from_env(cls) -> 'AwsConfig':
        """Create configuration from environment variables.

        Returns:
            AwsConfig instance
        """
        return cls()

    def with_overrides(
        self,
        region_name: Optional[str] = None,
        profile_name: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        debug: Optional[bool] = None
    ) -> 'AwsConfig':
        """Return a copy with command-line overrides applied.

        Arguments left as None keep the configured value. ``endpoint_url``
        applies to both services.
        """
        updates = {}
        if region_name is not None:
            updates['region_name'] = region_name
        if profile_name is not None:
            updates['profile_name'] = profile_name
        if endpoint_url is not None:
            updates['dynamodb_endpoint_url'] = endpoint_url
            updates['s3_endpoint_url'] = endpoint_url
        if debug:
            updates['enable_debug_logging'] = True
        return self.model_copy(update=updates)

    model_config = ConfigDict(
        validate_assignment=True,
        validate_default=True
    )
