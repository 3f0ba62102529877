"""Alarm notification fan-out: one SNS topic plus optional email subscribers.

Every alarm points its ``AlarmActions`` at the topic; recipients listed in
``ALERT_RECEIVER_EMAILS`` are subscribed over the ``email`` protocol and
have to confirm the subscription from the message AWS sends them.
"""

from __future__ import annotations

from typing import Any

from helpers.constants import (
    ALARM_TOPIC_DISPLAY_NAME,
    ALARM_TOPIC_NAME,
    ALERT_RECEIVER_EMAILS,
    APP_LOGGER,
)
from wrappers.sns import WrapperSNS


class NotificationService:
    """Ensure the alarm topic and its email subscriptions exist."""

    def __init__(
        self,
        sns: WrapperSNS | None = None,
        topic_name: str = ALARM_TOPIC_NAME,
        emails: list[str] | None = None,
    ) -> None:
        self.sns = sns or WrapperSNS()
        self.topic_name = topic_name
        self.emails = list(ALERT_RECEIVER_EMAILS if emails is None else emails)

        if not self.emails:
            APP_LOGGER.warning(
                msg="No ALERT_RECEIVER_EMAILS configured – alarm topic will have no subscribers."
            )

    def ensure(self) -> dict[str, Any]:
        """Create the topic and subscribe every recipient.

        Returns ``{"topic_arn": ..., "subscriptions": {email: arn}}``.
        """
        topic_arn = self.sns.ensure_topic(
            topic_name=self.topic_name, display_name=ALARM_TOPIC_DISPLAY_NAME
        )
        subscriptions = {
            email: self.sns.subscribe_email(topic_arn=topic_arn, email=email)
            for email in self.emails
        }
        return {"topic_arn": topic_arn, "subscriptions": subscriptions}
