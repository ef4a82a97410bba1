"""
Per-deploy state carried across the plugin's lifecycle hooks.
"""
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class DeploySession:
    """
    Transient state for a single deploy invocation.

    account_id: Caller account, filled in by the account resolver
    topic_refs: Topic names captured from ${snsPlus:<topic>} variables
    current_topics: Topic ARNs subscribed by the stack before this deploy
    """
    account_id: Optional[str] = None
    topic_refs: List[str] = field(default_factory=list)
    current_topics: List[str] = field(default_factory=list)
