"""
SNS Plus plugin
===============
Adds the `snsPlus` event type and the ${snsPlus:<topic>} variable to a
service, and manages the referenced SNS topics across a deploy:

1. before:package:initialize  rewrite snsPlus events into native sns events
2. before:deploy:deploy       snapshot the stack's current topics, then
                              create every referenced topic
3. after:deploy:deploy        delete snapshot topics left without subscribers
                              (only when custom.snsPlusClean is set)

Usage:
    host = ServerlessHost(service, options={'stage': 'prod'})
    plugin = SnsPlusPlugin(host)
    host.run_lifecycle(plugin)
"""
from typing import Optional

from .account import AccountResolver
from .config import CLEAN_FLAG, Config, get_logger, parse_version
from .errors import IncompatibleHostVersionError
from .provider import AwsProvider
from .reconciler import clean_up_orphaned_topics, create_topics, topics_to_create
from .scanner import convert_events
from .session import DeploySession
from .template import current_sns_topics
from .variables import SNS_PLUS_VARIABLE, SnsPlusVariableResolver

logger = get_logger(__name__)


class SnsPlusPlugin:
    """
    Lifecycle hooks for snsPlus topic management.

    Args:
        host: ServerlessHost for this deploy invocation
        provider: Async AWS provider (defaults to AwsProvider for host.region)
        config: Plugin defaults (defaults to the host's config)
    """

    def __init__(self, host, provider=None, config: Optional[Config] = None):
        self.host = host
        self.config = config or host.config
        self.validate_host_version()

        self._provider = provider
        self._account = None
        self.session = DeploySession()
        self.host.variables.register(
            SNS_PLUS_VARIABLE,
            SnsPlusVariableResolver(self.get_account_id, self.session, lambda: self.host.region),
        )
        self.hooks = {
            'before:package:initialize': self.convert_to_sns_events,
            'before:deploy:deploy': self.before_deploy,
            'after:deploy:deploy': self.clean_up_orphaned_topics,
        }

    def validate_host_version(self) -> None:
        if parse_version(self.host.version) < self.config.min_host_version_tuple:
            raise IncompatibleHostVersionError(self.host.version, self.config.min_host_version)

    @property
    def provider(self):
        """AWS provider for host.region, built on first use."""
        if self._provider is None:
            self._provider = AwsProvider(self.host.region, self.host.stage)
        return self._provider

    @property
    def account(self) -> AccountResolver:
        if self._account is None:
            self._account = AccountResolver(self.provider, self.session)
        return self._account

    async def get_account_id(self) -> str:
        return await self.account.get_account_id()

    @property
    def clean_enabled(self) -> bool:
        return bool(self.host.custom.get(CLEAN_FLAG, self.config.clean_by_default))

    async def convert_to_sns_events(self) -> None:
        """Converts snsPlus events to native SNS events."""
        self.host.log("Converting SNSPlus events to SNS events")
        account_id = await self.account.get_account_id()
        converted = convert_events(self.host.service, self.host.region, account_id)
        logger.debug("Converted %d snsPlus event(s)", converted)

    async def before_deploy(self) -> None:
        await self.save_current_sns_topics()
        await self.create_sns_topics()

    async def save_current_sns_topics(self) -> None:
        """Store the topics the deployed stack uses, for cleanup after deploy."""
        self.session.current_topics = await current_sns_topics(
            self.provider, self.host.stack_name
        )

    async def create_sns_topics(self) -> None:
        self.host.log("Creating SNSPlus topics...")
        await create_topics(self.provider, topics_to_create(self.host.service, self.session))
        self.host.log("SNSPlus topics created.")

    async def clean_up_orphaned_topics(self) -> None:
        """Delete pre-deploy topics that no longer have any subscriptions."""
        if not self.clean_enabled:
            logger.debug("%s not set, skipping topic cleanup", CLEAN_FLAG)
            return
        self.host.log("Cleaning up removed SNS topics...")
        deleted = await clean_up_orphaned_topics(self.provider, self.session.current_topics)
        logger.info("Deleted %d orphaned topic(s)", len(deleted))
        self.host.log("SNS topics cleaned.")
