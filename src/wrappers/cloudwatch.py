"""Manage Amazon CloudWatch dashboards and metric alarms."""

from typing import Any

import boto3
from botocore.exceptions import ClientError

from helpers.constants import APP_LOGGER, AWS_REGION

# DescribeAlarms accepts at most 100 alarm names per call
DESCRIBE_ALARMS_BATCH = 100


class WrapperCloudWatch:
    """Object to wrap CloudWatch interactions."""

    def __init__(self, region: str = AWS_REGION) -> None:
        self.cloudwatch_client = boto3.client("cloudwatch", region_name=region)
        self.region = region

    def put_dashboard(self, dashboard_name: str, dashboard_body: str) -> None:
        """Create or replace a dashboard with the given JSON body."""
        try:
            response = self.cloudwatch_client.put_dashboard(
                DashboardName=dashboard_name, DashboardBody=dashboard_body
            )
        except ClientError as exc:
            APP_LOGGER.error(msg=f"Error writing dashboard '{dashboard_name}': {exc}")
            raise

        for message in response.get("DashboardValidationMessages", []):
            APP_LOGGER.warning(
                msg=f"Dashboard validation: {message.get('Message')}",
                data_path=message.get("DataPath"),
            )
        APP_LOGGER.info(msg=f"Dashboard '{dashboard_name}' written.")

    def put_metric_alarm(self, alarm: dict[str, Any]) -> None:
        """Create or update a metric alarm (PutMetricAlarm is an upsert)."""
        try:
            self.cloudwatch_client.put_metric_alarm(**alarm)
        except ClientError as exc:
            APP_LOGGER.error(msg=f"Error writing alarm '{alarm['AlarmName']}': {exc}")
            raise
        APP_LOGGER.debug(msg=f"Alarm '{alarm['AlarmName']}' written.")

    def get_alarm_arns(self, alarm_names: list[str]) -> dict[str, str]:
        """Return ``{alarm_name: alarm_arn}`` for the alarms that exist."""
        arns: dict[str, str] = {}
        for start in range(0, len(alarm_names), DESCRIBE_ALARMS_BATCH):
            batch = alarm_names[start : start + DESCRIBE_ALARMS_BATCH]
            response = self.cloudwatch_client.describe_alarms(
                AlarmNames=batch,
                AlarmTypes=["MetricAlarm"],
                MaxRecords=DESCRIBE_ALARMS_BATCH,
            )
            for alarm in response.get("MetricAlarms", []):
                arns[alarm["AlarmName"]] = alarm["AlarmArn"]
        return arns
