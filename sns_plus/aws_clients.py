"""
AWS client factories with lazy initialization.

Using @lru_cache ensures one client per region is created for the lifetime
of the deploy process, and allows easy mocking in tests.
"""
import boto3
from functools import lru_cache


@lru_cache(maxsize=None)
def get_sns_client(region: str):
    """Get or create SNS client (cached per region)."""
    return boto3.client('sns', region_name=region)


@lru_cache(maxsize=None)
def get_cloudformation_client(region: str):
    """Get or create CloudFormation client (cached per region)."""
    return boto3.client('cloudformation', region_name=region)


@lru_cache(maxsize=None)
def get_sts_client(region: str):
    """Get or create STS client (cached per region)."""
    return boto3.client('sts', region_name=region)


def clear_client_cache():
    """Clear all cached clients. Useful for testing."""
    get_sns_client.cache_clear()
    get_cloudformation_client.cache_clear()
    get_sts_client.cache_clear()
