"""
PyTest fixtures for the SNS Plus tests.
"""

import os
import pytest

from sns_plus.aws_clients import clear_client_cache
from sns_plus.config import Config
from sns_plus.host import ServerlessHost


ACCOUNT_ID = "123456789012"


@pytest.fixture
def clean_env():
    """
    Fixture that provides a clean environment for testing.
    Saves and restores environment variables.
    """
    original_env = os.environ.copy()
    yield os.environ
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake credentials so boto3 never talks to a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def mocked_aws(aws_credentials):
    """moto-backed SNS/STS/CloudFormation with a fresh client cache."""
    from moto import mock_aws

    clear_client_cache()
    with mock_aws():
        yield
    clear_client_cache()


class FakeProvider:
    """
    In-memory stand-in for AwsProvider that records every call.

    topics: topic ARN -> attributes dict returned by get_topic_attributes
    template: GetTemplate response, or an exception to raise
    """

    def __init__(self, account_id=ACCOUNT_ID, topics=None, template=None, region="us-east-1"):
        self.account_id = account_id
        self.region = region
        self.topics = topics if topics is not None else {}
        self.template = template
        self.calls = []

    async def get_caller_identity(self):
        self.calls.append(("get_caller_identity",))
        if isinstance(self.account_id, Exception):
            raise self.account_id
        return {"Account": self.account_id}

    async def create_topic(self, name):
        self.calls.append(("create_topic", name))
        return f"arn:aws:sns:{self.region}:{self.account_id}:{name}"

    async def get_topic_attributes(self, topic_arn):
        from botocore.exceptions import ClientError

        self.calls.append(("get_topic_attributes", topic_arn))
        if topic_arn not in self.topics:
            raise ClientError(
                {"Error": {"Code": "NotFound", "Message": "Topic does not exist"}},
                "GetTopicAttributes",
            )
        return self.topics[topic_arn]

    async def delete_topic(self, topic_arn):
        self.calls.append(("delete_topic", topic_arn))
        self.topics.pop(topic_arn, None)

    async def get_template(self, stack_name):
        self.calls.append(("get_template", stack_name))
        if isinstance(self.template, Exception):
            raise self.template
        return self.template or {"TemplateBody": {"Resources": {}}}

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)


@pytest.fixture
def fake_provider():
    return FakeProvider()


@pytest.fixture
def sample_service():
    """
    Two functions: 'orders' subscribes via snsPlus, 'health' has only http.
    """
    return {
        "service": "shop",
        "provider": {"name": "aws", "region": "us-east-1"},
        "functions": {
            "orders": {
                "handler": "orders.handler",
                "events": [
                    {"http": {"path": "orders", "method": "post"}},
                    {"snsPlus": "order-created"},
                ],
            },
            "health": {
                "handler": "health.handler",
                "events": [{"http": {"path": "health", "method": "get"}}],
            },
        },
        "custom": {"snsPlusClean": True},
    }


@pytest.fixture
def host(sample_service):
    return ServerlessHost(sample_service, options={"stage": "dev"}, version="1.13.0",
                          config=Config())


@pytest.fixture
def make_provider():
    """Factory for FakeProvider instances with custom topics/template."""
    return FakeProvider
