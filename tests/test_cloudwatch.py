"""Unit tests for wrappers.cloudwatch."""

from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from wrappers.cloudwatch import WrapperCloudWatch


class TestWrapperCloudWatch:
    """Tests for the CloudWatch wrapper."""

    def _make_wrapper(self) -> WrapperCloudWatch:
        with patch("wrappers.cloudwatch.boto3") as mock_boto3:
            mock_boto3.client.return_value = MagicMock()
            return WrapperCloudWatch(region="us-east-1")

    def test_put_dashboard(self):
        wrapper = self._make_wrapper()
        wrapper.cloudwatch_client.put_dashboard.return_value = {
            "DashboardValidationMessages": []
        }

        wrapper.put_dashboard("BedrockQuotaDash", '{"widgets": []}')

        wrapper.cloudwatch_client.put_dashboard.assert_called_once_with(
            DashboardName="BedrockQuotaDash", DashboardBody='{"widgets": []}'
        )

    def test_put_dashboard_error_propagates(self):
        wrapper = self._make_wrapper()
        wrapper.cloudwatch_client.put_dashboard.side_effect = ClientError(
            {"Error": {"Code": "InvalidParameterInput", "Message": "bad"}}, "PutDashboard"
        )
        with pytest.raises(ClientError):
            wrapper.put_dashboard("BedrockQuotaDash", "{}")

    def test_put_metric_alarm_passes_kwargs(self):
        wrapper = self._make_wrapper()
        alarm = {"AlarmName": "a", "Threshold": 1.0}

        wrapper.put_metric_alarm(alarm)

        wrapper.cloudwatch_client.put_metric_alarm.assert_called_once_with(
            AlarmName="a", Threshold=1.0
        )

    def test_get_alarm_arns(self):
        wrapper = self._make_wrapper()
        wrapper.cloudwatch_client.describe_alarms.return_value = {
            "MetricAlarms": [
                {"AlarmName": "a", "AlarmArn": "arn:a"},
                {"AlarmName": "b", "AlarmArn": "arn:b"},
            ]
        }

        assert wrapper.get_alarm_arns(["a", "b"]) == {"a": "arn:a", "b": "arn:b"}

    def test_get_alarm_arns_batches_by_100(self):
        wrapper = self._make_wrapper()
        wrapper.cloudwatch_client.describe_alarms.return_value = {"MetricAlarms": []}

        wrapper.get_alarm_arns([f"alarm-{i}" for i in range(150)])

        calls = wrapper.cloudwatch_client.describe_alarms.call_args_list
        assert len(calls) == 2
        assert len(calls[0].kwargs["AlarmNames"]) == 100
        assert len(calls[1].kwargs["AlarmNames"]) == 50
