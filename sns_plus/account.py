"""
Account ID resolution.

ARNs need the account ID of the assumed role, which only STS knows. The
lookup is done once per deploy session and shared by every caller.
"""
import asyncio

from .config import get_logger
from .session import DeploySession

logger = get_logger(__name__)


class AccountResolver:
    """
    Resolves and memoizes the caller's AWS account ID on a DeploySession.

    Concurrent callers that arrive before the first lookup finishes wait on
    the same lock, so STS is called at most once per session. A failed lookup
    propagates and leaves nothing cached.
    """

    def __init__(self, provider, session: DeploySession):
        self.provider = provider
        self.session = session
        self._lock = asyncio.Lock()

    async def get_account_id(self) -> str:
        if self.session.account_id:
            return self.session.account_id

        async with self._lock:
            if not self.session.account_id:
                identity = await self.provider.get_caller_identity()
                self.session.account_id = identity['Account']
                logger.info("Resolved AWS account %s", self.session.account_id)
        return self.session.account_id
