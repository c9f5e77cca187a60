from .config import AwsConfig

__all__ = ["AwsConfig"]
