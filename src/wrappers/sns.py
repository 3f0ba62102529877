"""Manage Amazon SNS topics and subscriptions."""

import boto3
from botocore.exceptions import ClientError

from helpers.constants import APP_LOGGER, AWS_REGION


class WrapperSNS:
    """Object to wrap SNS interactions."""

    def __init__(self, region: str = AWS_REGION) -> None:
        self.sns_client = boto3.client("sns", region_name=region)

    def ensure_topic(self, topic_name: str, display_name: str = "") -> str:
        """Create the topic if needed and return its ARN.

        CreateTopic is idempotent: an existing topic with the same name and
        attributes is returned unchanged.
        """
        attributes = {"DisplayName": display_name} if display_name else {}
        try:
            response = self.sns_client.create_topic(
                Name=topic_name, Attributes=attributes
            )
        except ClientError as exc:
            APP_LOGGER.error(msg=f"Error creating topic '{topic_name}': {exc}")
            raise
        topic_arn = response["TopicArn"]
        APP_LOGGER.info(msg=f"Alarm topic ready: {topic_arn}")
        return topic_arn

    def subscribe_email(self, topic_arn: str, email: str) -> str:
        """Subscribe ``email`` to the topic.

        Returns the subscription ARN, or ``"pending confirmation"`` until the
        recipient confirms.
        """
        try:
            response = self.sns_client.subscribe(
                TopicArn=topic_arn,
                Protocol="email",
                Endpoint=email,
                ReturnSubscriptionArn=False,
            )
        except ClientError as exc:
            APP_LOGGER.error(msg=f"Error subscribing '{email}' to {topic_arn}: {exc}")
            raise
        subscription_arn = response["SubscriptionArn"]
        APP_LOGGER.info(msg=f"Email subscription for {email}: {subscription_arn}")
        return subscription_arn
