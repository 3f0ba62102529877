"""Integration-style tests for the QuotaMonitorService."""

import json
from unittest.mock import MagicMock, patch

import pytest

from config.quota_registry import CLAUDE_3_HAIKU, REQUEST_METRICS, QuotaRegistry
from config.quotas import (
    QuotaDefinition,
    QuotaSetMismatchError,
    QuotaValue,
    UnknownQuotaCodeError,
)
from services.dashboard_builder import DashboardLayoutError
from services.quota_lookup import QuotaLookupService
from services.quota_monitor import PREVIEW_TOPIC_ARN, QuotaMonitorService

TOPIC_ARN = "arn:aws:sns:us-east-1:123456789012:bedrock-quota-alarm-topic"


class TestQuotaMonitorService:
    """Tests for the core orchestrator with every AWS client mocked."""

    def _make_service(
        self, registry, quota_value_factory, policy: str = "dual"
    ) -> QuotaMonitorService:
        service_quotas = MagicMock()
        service_quotas.get_quota_value.side_effect = quota_value_factory

        notifications = MagicMock()
        notifications.ensure.return_value = {
            "topic_arn": TOPIC_ARN,
            "subscriptions": {"ops@example.com": "pending confirmation"},
        }

        cloudwatch = MagicMock()
        cloudwatch.get_alarm_arns.side_effect = lambda names: {
            name: f"arn:aws:cloudwatch:us-east-1:123456789012:alarm:{name}" for name in names
        }

        return QuotaMonitorService(
            lookup=QuotaLookupService(registry=registry, service_quotas=service_quotas),
            notifications=notifications,
            cloudwatch=cloudwatch,
            alarm_policy=policy,
        )

    def test_run_sync_returns_summary(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory)

        result = svc.run_sync()

        assert result["dashboard_name"] == "BedrockQuotaDash"
        assert result["dashboard_url"].endswith("#dashboards:name=BedrockQuotaDash")
        assert result["topic_arn"] == TOPIC_ARN
        assert len(result["quota_values"]) == len(registry)
        assert result["quota_values"][0]["modelInfo"]["modelId"]
        json.dumps(result)

    def test_run_sync_writes_dashboard_and_alarms(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory)

        result = svc.run_sync()

        svc.cloudwatch.put_dashboard.assert_called_once()
        name, body = svc.cloudwatch.put_dashboard.call_args.args
        assert name == "BedrockQuotaDash"
        assert len(json.loads(body)["widgets"]) == len(registry) + 2 * len(registry.models())

        assert svc.cloudwatch.put_metric_alarm.call_count == 2 * len(registry)
        for call in svc.cloudwatch.put_metric_alarm.call_args_list:
            assert call.args[0]["AlarmActions"] == [TOPIC_ARN]
        assert len(result["alarm_arns"]) == 2 * len(registry)
        assert result["alarm_names"][0] == "bedrock-quota-alarm-L-FF8B4E28-warning"

    def test_single_policy_one_alarm_per_quota(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory, policy="single")

        result = svc.run_sync()

        assert svc.cloudwatch.put_metric_alarm.call_count == len(registry)
        assert result["alarm_policy"] == "single"

    def test_unregistered_code_aborts_everything(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory)
        rogue = QuotaValue(quota_code="L-DEADBEEF", quota_name="rogue", value=1.0)
        svc.lookup.service_quotas.get_quota_value.side_effect = (
            lambda code: rogue if code == "L-3D8CC480" else quota_value_factory(code)
        )

        with pytest.raises(UnknownQuotaCodeError):
            svc.run_sync()

        svc.notifications.ensure.assert_not_called()
        svc.cloudwatch.put_dashboard.assert_not_called()
        svc.cloudwatch.put_metric_alarm.assert_not_called()

    def test_duplicate_code_aborts_everything(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory)
        svc.lookup.service_quotas.get_quota_value.side_effect = lambda code: quota_value_factory(
            "L-FF8B4E28" if code == "L-1D3E59A3" else code
        )

        with pytest.raises(QuotaSetMismatchError):
            svc.run_sync()

        svc.notifications.ensure.assert_not_called()
        svc.cloudwatch.put_dashboard.assert_not_called()
        svc.cloudwatch.put_metric_alarm.assert_not_called()

    def test_overfull_dashboard_row_aborts_everything(self, quota_value_factory):
        crowded = QuotaRegistry(
            {
                code: QuotaDefinition(code, CLAUDE_3_HAIKU, REQUEST_METRICS)
                for code in ("L-DCADBC78", "L-616A3F5B", "L-3D8CC480")
            }
        )
        svc = self._make_service(crowded, quota_value_factory)

        with pytest.raises(DashboardLayoutError):
            svc.run_sync()

        svc.notifications.ensure.assert_not_called()
        svc.cloudwatch.put_dashboard.assert_not_called()
        svc.cloudwatch.put_metric_alarm.assert_not_called()

    def test_lookup_failure_propagates(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory)
        svc.lookup.service_quotas.get_quota_value.side_effect = RuntimeError("throttled")

        with pytest.raises(RuntimeError):
            svc.run_sync()
        svc.cloudwatch.put_dashboard.assert_not_called()

    @patch("services.quota_monitor.DRY_RUN_MODE", True)
    def test_dry_run_writes_nothing(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory)

        result = svc.run_sync()

        assert result["dry_run"] is True
        assert result["alarm_arns"] == []
        assert len(result["alarm_names"]) == 2 * len(registry)
        svc.notifications.ensure.assert_not_called()
        svc.cloudwatch.put_dashboard.assert_not_called()
        svc.cloudwatch.put_metric_alarm.assert_not_called()

    def test_preview_renders_without_writing(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory)

        preview = svc.preview()

        assert len(preview["dashboard"]["widgets"]) == 12
        assert len(preview["alarms"]) == 12
        assert all(a["AlarmActions"] == [PREVIEW_TOPIC_ARN] for a in preview["alarms"])
        svc.notifications.ensure.assert_not_called()
        svc.cloudwatch.put_dashboard.assert_not_called()

    def test_get_quota_values(self, registry, quota_value_factory):
        svc = self._make_service(registry, quota_value_factory)

        values = svc.get_quota_values()

        assert [v["quotaCode"] for v in values] == registry.codes()
        assert values[1]["modelInfo"]["metrics"] == ["Invocations"]

    def test_unknown_policy_rejected(self, registry, quota_value_factory):
        with pytest.raises(ValueError):
            self._make_service(registry, quota_value_factory, policy="triple")
