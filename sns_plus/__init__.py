"""
SNS Plus: snsPlus event type and topic lifecycle management for deploys.
"""
from .arn_utils import format_sns_arn, topic_name_from_arn
from .config import Config
from .errors import IncompatibleHostVersionError, SnsPlusError, UnresolvedVariableError
from .host import DEPLOY_LIFECYCLE, ServerlessHost
from .plugin import SnsPlusPlugin
from .session import DeploySession

__all__ = [
    'format_sns_arn',
    'topic_name_from_arn',
    'Config',
    'SnsPlusError',
    'IncompatibleHostVersionError',
    'UnresolvedVariableError',
    'DEPLOY_LIFECYCLE',
    'ServerlessHost',
    'SnsPlusPlugin',
    'DeploySession',
]
