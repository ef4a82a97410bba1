"""
Template differ: which SNS topics does the currently deployed stack use?

Reads the previously deployed CloudFormation template and collects the
literal TopicArn of every AWS::SNS::Subscription resource. The snapshot is
taken before the new stack is applied so orphaned topics can be found
after the deploy.
"""
import json
from typing import Any, Dict, List

import yaml
from botocore.exceptions import ClientError

from .config import get_logger
from .errors import is_stack_missing

logger = get_logger(__name__)

SUBSCRIPTION_TYPE = 'AWS::SNS::Subscription'


class _CfnLoader(yaml.SafeLoader):
    """SafeLoader that tolerates CloudFormation short-form tags (!Ref, !GetAtt...)."""


def _construct_cfn_tag(loader, tag_suffix, node):
    if isinstance(node, yaml.ScalarNode):
        value = loader.construct_scalar(node)
    elif isinstance(node, yaml.SequenceNode):
        value = loader.construct_sequence(node)
    else:
        value = loader.construct_mapping(node)
    name = tag_suffix if tag_suffix == 'Ref' else f'Fn::{tag_suffix}'
    return {name: value}


_CfnLoader.add_multi_constructor('!', _construct_cfn_tag)


def parse_template_body(body: Any) -> Dict[str, Any]:
    """
    Decode a GetTemplate TemplateBody.

    boto3 hands back JSON templates already decoded into a dict and YAML
    templates as a string, so both forms are accepted.
    """
    if isinstance(body, dict):
        return body
    if not body:
        return {}
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return yaml.load(body, Loader=_CfnLoader) or {}


def subscription_topic_arns(resources: Dict[str, Any]) -> List[str]:
    """
    Extract literal TopicArns from SNS subscription resources.

    Intrinsic references ({"Ref": ...}, {"Fn::GetAtt": ...}) point at topics
    owned by the stack itself and are skipped.

    Args:
        resources: The template's Resources mapping

    Returns:
        TopicArn strings in template order
    """
    topic_arns = []
    for resource in (resources or {}).values():
        if not isinstance(resource, dict) or resource.get('Type') != SUBSCRIPTION_TYPE:
            continue
        topic_arn = (resource.get('Properties') or {}).get('TopicArn')
        if topic_arn and isinstance(topic_arn, str):
            topic_arns.append(topic_arn)
    return topic_arns


async def current_sns_topics(provider, stack_name: str) -> List[str]:
    """
    Pull the SNS topics subscribed by the currently deployed stack.

    A stack that doesn't exist yet (first deploy) yields an empty list.
    """
    try:
        response = await provider.get_template(stack_name)
    except ClientError as e:
        if is_stack_missing(e):
            logger.info("Stack %s does not exist yet, no current SNS topics", stack_name)
        else:
            logger.warning("Could not read template for stack %s, assuming no current "
                           "SNS topics: %s", stack_name, e)
        return []

    template = parse_template_body(response.get('TemplateBody'))
    topic_arns = subscription_topic_arns(template.get('Resources', {}))
    logger.info("Stack %s currently subscribes to %d SNS topic(s)", stack_name, len(topic_arns))
    return topic_arns
