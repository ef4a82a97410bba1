"""
Variable resolution for ${source:value} references in service config.

The host owns a VariableResolverChain; plugins register a pattern and an
async resolver for the variable sources they understand. The snsPlus source
turns ${snsPlus:orders} into the ARN of the "orders" topic and remembers the
topic so it gets created before deploy.
"""
import re
from typing import Any, Awaitable, Callable, List, Optional, Pattern, Tuple, Union

from .arn_utils import format_sns_arn
from .config import get_logger
from .errors import UnresolvedVariableError

logger = get_logger(__name__)

VARIABLE_REFERENCE = re.compile(r'\$\{([^{}]+)\}')
SNS_PLUS_VARIABLE = re.compile(r'^snsPlus:')

Resolver = Callable[[str], Awaitable[Any]]


def split_fallback(variable_string: str) -> Tuple[str, Optional[str]]:
    """
    Split "source:key, 'default'" into ("key", "default").

    The default may be single- or double-quoted. Without a comma the default
    is None.

    Examples:
        >>> split_fallback("opt:stage, 'dev'")
        ('stage', 'dev')
        >>> split_fallback("env:TEAM")
        ('TEAM', None)
    """
    reference = variable_string.split(':', 1)[1]
    key, sep, default = reference.partition(',')
    if not sep:
        return key.strip(), None
    default = default.strip()
    if len(default) >= 2 and default[0] == default[-1] and default[0] in ('"', "'"):
        default = default[1:-1]
    return key.strip(), default


class VariableResolverChain:
    """Ordered (pattern, resolver) pairs; the first matching pattern wins."""

    def __init__(self):
        self._resolvers: List[Tuple[Pattern, Resolver]] = []

    def register(self, pattern: Union[str, Pattern], resolver: Resolver) -> None:
        if isinstance(pattern, str):
            pattern = re.compile(pattern)
        self._resolvers.append((pattern, resolver))

    def __len__(self):
        return len(self._resolvers)

    async def resolve(self, variable_string: str) -> Any:
        for pattern, resolver in self._resolvers:
            if pattern.match(variable_string):
                return await resolver(variable_string)
        raise UnresolvedVariableError(variable_string)


async def _resolve_string(value: str, chain: VariableResolverChain) -> Any:
    matches = list(VARIABLE_REFERENCE.finditer(value))
    if not matches:
        return value

    # A value that is exactly one reference takes the resolved value as-is
    if len(matches) == 1 and matches[0].group(0) == value:
        return await chain.resolve(matches[0].group(1).strip())

    parts = []
    last = 0
    for match in matches:
        parts.append(value[last:match.start()])
        parts.append(str(await chain.resolve(match.group(1).strip())))
        last = match.end()
    parts.append(value[last:])
    return ''.join(parts)


async def resolve_variables(value: Any, chain: VariableResolverChain) -> Any:
    """
    Resolve every ${...} reference found in strings nested in value.

    Dicts and lists are updated in place; the (possibly new) value is
    returned so top-level strings can be resolved too.
    """
    if isinstance(value, str):
        return await _resolve_string(value, chain)
    if isinstance(value, dict):
        for key in list(value):
            value[key] = await resolve_variables(value[key], chain)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            value[index] = await resolve_variables(item, chain)
    return value


class SnsPlusVariableResolver:
    """
    Resolves ${snsPlus:<topic>} to the topic's ARN.

    Args:
        get_account_id: Coroutine function returning the caller account ID
        session: DeploySession that records the referenced topics
        region: Callable returning the deploy region, read on every resolve
    """

    def __init__(self, get_account_id: Callable[[], Awaitable[str]], session,
                 region: Callable[[], str]):
        self.get_account_id = get_account_id
        self.session = session
        self.region = region

    async def __call__(self, variable_string: str) -> str:
        topic_name = SNS_PLUS_VARIABLE.sub('', variable_string, count=1).strip()
        account_id = await self.get_account_id()
        self.session.topic_refs.append(topic_name)
        logger.debug("Resolved ${%s} for topic %s", variable_string, topic_name)
        return format_sns_arn(self.region(), account_id, topic_name)
