"""
Configuration scanner for snsPlus function events.

Walks the service's function definitions and finds event entries of the form

    events:
      - snsPlus: orders

which are rewritten in place into native SNS events

    events:
      - snsPlus: orders
        sns: arn:aws:sns:<region>:<account>:orders
"""
from typing import Any, Dict, List

from .arn_utils import format_sns_arn
from .config import EVENT_KEY


def _is_sns_plus_event(event: Any) -> bool:
    return isinstance(event, dict) and bool(event.get(EVENT_KEY))


def all_functions(service: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return all defined functions as a list, in declaration order."""
    functions = service.get('functions') or {}
    return list(functions.values())


def sns_plus_functions(service: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return the functions that subscribe to at least one snsPlus event."""
    return [
        func for func in all_functions(service)
        if func and any(_is_sns_plus_event(event) for event in func.get('events') or [])
    ]


def sns_plus_events(service: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Return every snsPlus event entry across all functions, order preserved."""
    return [
        event
        for func in sns_plus_functions(service)
        for event in func.get('events') or []
        if _is_sns_plus_event(event)
    ]


def sns_plus_topic_names(service: Dict[str, Any]) -> List[str]:
    """Topic names referenced by snsPlus events. Duplicates are kept."""
    return [event[EVENT_KEY] for event in sns_plus_events(service)]


def convert_events(service: Dict[str, Any], region: str, account_id: str) -> int:
    """
    Rewrite snsPlus events into native sns events carrying the topic ARN.

    Args:
        service: Service configuration, mutated in place
        region: Region the topics live in
        account_id: Account that owns the topics

    Returns:
        Number of events rewritten
    """
    events = sns_plus_events(service)
    for event in events:
        event['sns'] = format_sns_arn(region, account_id, event[EVENT_KEY])
    return len(events)
