"""
Topic reconciliation: create referenced topics, delete orphaned ones.

Both operations fan out one remote call per topic and wait for all of them
before returning. There is no ordering between individual topics.
"""
import asyncio
from typing import Any, Dict, List

from botocore.exceptions import BotoCoreError, ClientError

from .arn_utils import topic_name_from_arn
from .config import get_logger
from .errors import error_code
from .scanner import sns_plus_topic_names
from .session import DeploySession

logger = get_logger(__name__)


async def _settle(coros) -> List[Any]:
    """
    Await every call, then raise the first failure, if any.

    Every call has finished by the time an error is raised.
    """
    results = await asyncio.gather(*coros, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return results


def topics_to_create(service: Dict[str, Any], session: DeploySession) -> List[str]:
    """
    All topic names the deploy needs: snsPlus events, then ${snsPlus:} refs.

    Not deduplicated. CreateTopic returns the existing topic when the name is
    already taken, so repeats are harmless.
    """
    return sns_plus_topic_names(service) + list(session.topic_refs)


def is_orphaned(attributes: Dict[str, str]) -> bool:
    """True when a topic has no pending and no confirmed subscriptions."""
    return (attributes.get('SubscriptionsPending') == '0'
            and attributes.get('SubscriptionsConfirmed') == '0')


async def create_topics(provider, topic_names: List[str]) -> List[str]:
    """
    Create every topic concurrently.

    Returns:
        Topic ARNs, in the same order as topic_names
    """
    topic_arns = await _settle(provider.create_topic(name) for name in topic_names)
    for arn in topic_arns:
        logger.debug("Ensured topic %s", arn)
    return list(topic_arns)


async def _delete_if_orphaned(provider, topic_arn: str) -> bool:
    try:
        attributes = await provider.get_topic_attributes(topic_arn)
    except (ClientError, BotoCoreError) as e:
        # Can't prove the topic is unused, so leave it alone
        logger.info("Skipping cleanup of %s (%s)", topic_arn, error_code(e) or e)
        return False

    if not is_orphaned(attributes):
        logger.debug("Topic %s still has subscriptions, keeping it", topic_arn)
        return False

    await provider.delete_topic(topic_arn)
    logger.info("Deleted orphaned topic %s", topic_name_from_arn(topic_arn))
    return True


async def clean_up_orphaned_topics(provider, topic_arns: List[str]) -> List[str]:
    """
    Delete the snapshot topics that no longer have any subscriptions.

    Attributes are re-read live right before deciding, so a topic that gained
    a subscriber since the snapshot is kept.

    Returns:
        ARNs of the deleted topics
    """
    deleted = await _settle(_delete_if_orphaned(provider, arn) for arn in topic_arns)
    return [arn for arn, was_deleted in zip(topic_arns, deleted) if was_deleted]
