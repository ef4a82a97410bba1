"""
Async AWS provider for the plugin's remote calls.

boto3 is blocking, so every call is dispatched to a worker thread with
asyncio.to_thread. This lets the reconciler fan out independent topic
operations with asyncio.gather while the hook itself stays sequential.
"""
import asyncio
from typing import Optional

from .aws_clients import get_cloudformation_client, get_sns_client, get_sts_client
from .config import get_logger

logger = get_logger(__name__)


class AwsProvider:
    """
    Thin async wrapper around the SNS, CloudFormation and STS APIs.

    Args:
        region: AWS region every call is issued against
        stage: Deployment stage, kept for log context
    """

    def __init__(self, region: str, stage: Optional[str] = None):
        self.region = region
        self.stage = stage

    async def _call(self, client, method: str, **params) -> dict:
        logger.debug("%s.%s %s (region=%s, stage=%s)",
                     client.meta.service_model.service_name, method, params,
                     self.region, self.stage)
        return await asyncio.to_thread(getattr(client, method), **params)

    async def create_topic(self, name: str) -> str:
        """Create a topic (idempotent on the AWS side) and return its ARN."""
        response = await self._call(get_sns_client(self.region), 'create_topic', Name=name)
        return response['TopicArn']

    async def get_topic_attributes(self, topic_arn: str) -> dict:
        response = await self._call(
            get_sns_client(self.region), 'get_topic_attributes', TopicArn=topic_arn
        )
        return response.get('Attributes', {})

    async def delete_topic(self, topic_arn: str) -> None:
        await self._call(get_sns_client(self.region), 'delete_topic', TopicArn=topic_arn)

    async def get_template(self, stack_name: str) -> dict:
        """Return the raw GetTemplate response for the deployed stack."""
        return await self._call(
            get_cloudformation_client(self.region), 'get_template', StackName=stack_name
        )

    async def get_caller_identity(self) -> dict:
        return await self._call(get_sts_client(self.region), 'get_caller_identity')
