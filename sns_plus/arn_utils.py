"""
SNS ARN utilities.

Builds topic ARNs from (region, account, name) and extracts topic names back
out of them for log output.
"""

SNS_ARN_TEMPLATE = 'arn:aws:sns:{region}:{account_id}:{topic_name}'


def format_sns_arn(region: str, account_id: str, topic_name: str) -> str:
    """
    Format an SNS topic ARN.

    Args:
        region: AWS region the topic lives in
        account_id: AWS account ID that owns the topic
        topic_name: Name of the SNS topic

    Returns:
        Topic ARN string

    Examples:
        >>> format_sns_arn("us-east-1", "123456789012", "orders")
        'arn:aws:sns:us-east-1:123456789012:orders'
    """
    return SNS_ARN_TEMPLATE.format(
        region=region, account_id=account_id, topic_name=topic_name
    )


def topic_name_from_arn(arn: str) -> str:
    """
    Extract the topic name (last ARN segment) from an SNS topic ARN.

    Returns '' if the ARN is empty or None.
    """
    if not arn:
        return ''
    return arn.split(':')[-1]
