"""
Host framework extension points.

ServerlessHost models what the plugin needs from the deploy framework: the
service document, CLI options, a variable resolver chain, user-facing
logging, stack naming and lifecycle hook dispatch. The framework drives the
plugin by calling hooks in lifecycle order within one deploy invocation.
"""
import asyncio
import os
from typing import Any, Dict, Iterable, Optional

from .config import Config, get_logger
from .variables import VariableResolverChain, resolve_variables, split_fallback

logger = get_logger(__name__)

# Lifecycle events in the order a `deploy` runs them
DEPLOY_LIFECYCLE = (
    'before:package:initialize',
    'before:deploy:deploy',
    'after:deploy:deploy',
)


class ServerlessHost:
    """
    Deploy framework context for one invocation.

    Args:
        service: Parsed service document (provider, functions, custom, ...)
        options: CLI options, e.g. {'stage': 'prod', 'region': 'eu-west-1'}
        version: Framework version string
        config: Plugin defaults (region, stage)
    """

    def __init__(self, service: Dict[str, Any], options: Optional[Dict[str, Any]] = None,
                 version: str = '1.13.0', config: Optional[Config] = None):
        self.service = service
        self.options = options or {}
        self.version = version
        self.config = config or Config.from_env()
        self.variables = VariableResolverChain()
        self.variables.register(r'^opt:', self._resolve_option)
        self.variables.register(r'^env:', self._resolve_env)

    # -------------------------------------------------------------------------
    # Service accessors
    # -------------------------------------------------------------------------

    @property
    def provider_config(self) -> Dict[str, Any]:
        return self.service.get('provider') or {}

    @property
    def custom(self) -> Dict[str, Any]:
        return self.service.get('custom') or {}

    @property
    def stage(self) -> str:
        return (self.options.get('stage')
                or self.provider_config.get('stage')
                or self.config.default_stage)

    @property
    def region(self) -> str:
        """CLI option, then provider.region, then the configured default."""
        return (self.options.get('region')
                or self.provider_config.get('region')
                or self.config.default_region)

    @property
    def stack_name(self) -> str:
        custom_name = self.provider_config.get('stackName')
        if custom_name:
            return custom_name
        return f"{self.service.get('service')}-{self.stage}"

    def log(self, message: str) -> None:
        """User-facing progress output."""
        logger.info(message)

    # -------------------------------------------------------------------------
    # Variables
    # -------------------------------------------------------------------------

    async def _resolve_option(self, variable_string: str) -> Any:
        key, default = split_fallback(variable_string)
        value = self.options.get(key)
        return default if value in (None, '') else value

    async def _resolve_env(self, variable_string: str) -> Any:
        key, default = split_fallback(variable_string)
        return os.environ.get(key) or default

    async def populate_variables(self) -> Dict[str, Any]:
        """
        Resolve every ${...} reference in the service document in place.

        The provider block goes first so provider.region is final before any
        other reference that depends on it.
        """
        if isinstance(self.service.get('provider'), dict):
            await resolve_variables(self.service['provider'], self.variables)
        return await resolve_variables(self.service, self.variables)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    async def run_hook(self, event_name: str, plugin) -> bool:
        """
        Run the plugin's hook for event_name, if it has one.

        Returns:
            True if a hook ran
        """
        hook = plugin.hooks.get(event_name)
        if hook is None:
            return False
        logger.debug("Running hook %s", event_name)
        await hook()
        return True

    async def _run_events(self, plugin, events: Iterable[str]) -> None:
        await self.populate_variables()
        for event_name in events:
            await self.run_hook(event_name, plugin)

    def run_lifecycle(self, plugin, events: Iterable[str] = DEPLOY_LIFECYCLE) -> None:
        """
        Drive a full deploy invocation on one event loop.

        Variables are populated first, then each hook runs to completion
        before the next starts. The first failure aborts the rest.
        """
        asyncio.run(self._run_events(plugin, events))
