"""
Error types and botocore error classification.

Remote failures are inspected by their AWS error code to decide whether they
are recoverable (missing stack, missing topic) or must abort the hook.
"""
from typing import Optional

from botocore.exceptions import ClientError


class SnsPlusError(Exception):
    """Base class for plugin errors surfaced to the host."""


class IncompatibleHostVersionError(SnsPlusError):
    """Raised when the host framework is older than the supported minimum."""

    def __init__(self, host_version: str, min_version: str):
        self.host_version = host_version
        self.min_version = min_version
        super().__init__(
            "Incompatible serverless version:\n\n"
            f"Serverless version must be at least {min_version} to work with "
            f"the SNS Plus plugin (found {host_version})."
        )


class UnresolvedVariableError(SnsPlusError):
    """Raised when no registered resolver matches a variable reference."""

    def __init__(self, variable_string: str):
        self.variable_string = variable_string
        super().__init__(f"No variable resolver registered for '${{{variable_string}}}'")


def error_code(error: Exception) -> Optional[str]:
    """
    Extract the AWS error code from a botocore ClientError.

    Returns:
        Error code string (e.g. 'ValidationError', 'NotFound') or None
        for anything that is not a ClientError.
    """
    if not isinstance(error, ClientError):
        return None
    return error.response.get('Error', {}).get('Code')


def is_stack_missing(error: Exception) -> bool:
    """
    True when a CloudFormation call failed because the stack doesn't exist.

    CloudFormation reports this as a generic ValidationError whose message
    reads "Stack with id <name> does not exist".
    """
    if error_code(error) != 'ValidationError':
        return False
    message = error.response.get('Error', {}).get('Message', '')
    return 'does not exist' in message
