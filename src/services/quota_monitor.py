"""Core quota-monitoring orchestrator.

This module ties together:
  • Service Quotas (current quota values)  – via QuotaLookupService
  • CloudWatch dashboard                   – via DashboardBuilder
  • CloudWatch alarms                      – via AlarmBuilder
  • SNS topic + email subscriptions        – via NotificationService

It is called by the FastAPI ``/sync`` endpoint and by ``main.py``.
"""

from __future__ import annotations

from typing import Any

from config.alarm_policy import get_alarm_policy
from config.quotas import ModelQuotas, QuotaValue
from helpers.constants import (
    ALARM_POLICY,
    APP_LOGGER,
    AWS_REGION,
    DASHBOARD_NAME,
    DRY_RUN_MODE,
)
from helpers.utils import dashboard_url, format_number
from services.alarm_builder import AlarmBuilder
from services.dashboard_builder import DashboardBuilder
from services.notification import NotificationService
from services.quota_lookup import QuotaLookupService
from wrappers.cloudwatch import WrapperCloudWatch

# Stand-in topic ARN for renders that never touch SNS
PREVIEW_TOPIC_ARN = "arn:aws:sns:<region>:<account>:<topic>"


class QuotaMonitorService:
    """Runs a full quota → dashboard + alarms synchronisation pass."""

    def __init__(
        self,
        lookup: QuotaLookupService | None = None,
        notifications: NotificationService | None = None,
        cloudwatch: WrapperCloudWatch | None = None,
        alarm_policy: str = ALARM_POLICY,
    ) -> None:
        self.lookup = lookup or QuotaLookupService()
        self.notifications = notifications or NotificationService()
        self.cloudwatch = cloudwatch or WrapperCloudWatch()
        self.alarm_policy = alarm_policy
        self.dashboards = DashboardBuilder(region=AWS_REGION)
        self.alarms = AlarmBuilder(tiers=get_alarm_policy(alarm_policy))

        APP_LOGGER.info(msg="QuotaMonitorService initialised.")

    # ── public entry points ───────────────────────────────────────────────

    def run_sync(self) -> dict[str, Any]:
        """Execute a full sync.  Returns a JSON-serialisable summary.

        Quota codes and the dashboard layout are validated before anything
        is written, so a configuration error leaves nothing behind in AWS.
        """
        APP_LOGGER.info(msg="=" * 72)
        APP_LOGGER.info(msg="Starting quota sync …")
        if DRY_RUN_MODE:
            APP_LOGGER.warning(msg="DRY RUN – nothing will be written to AWS")
        APP_LOGGER.info(msg="=" * 72)

        models = self._resolve_models()
        quotas = _flatten(models)
        dashboard_body = self.dashboards.render_body(models)

        if DRY_RUN_MODE:
            notification = {"topic_arn": PREVIEW_TOPIC_ARN, "subscriptions": {}}
        else:
            notification = self.notifications.ensure()

        alarm_defs = self.alarms.build(quotas, topic_arn=notification["topic_arn"])
        alarm_names = [alarm["AlarmName"] for alarm in alarm_defs]

        alarm_arns: list[str] = []
        if DRY_RUN_MODE:
            APP_LOGGER.warning(
                msg=f"[DRY RUN] Would write dashboard '{DASHBOARD_NAME}' and {len(alarm_defs)} alarm(s)"
            )
        else:
            self.cloudwatch.put_dashboard(DASHBOARD_NAME, dashboard_body)
            for alarm in alarm_defs:
                self.cloudwatch.put_metric_alarm(alarm)
            arns = self.cloudwatch.get_alarm_arns(alarm_names)
            alarm_arns = [arns[name] for name in alarm_names if name in arns]

        summary = {
            "region": AWS_REGION,
            "dry_run": DRY_RUN_MODE,
            "alarm_policy": self.alarm_policy,
            "dashboard_name": DASHBOARD_NAME,
            "dashboard_url": dashboard_url(AWS_REGION, DASHBOARD_NAME),
            "topic_arn": notification["topic_arn"],
            "subscriptions": notification["subscriptions"],
            "quota_values": [quota.as_dict() for quota in quotas],
            "alarm_names": alarm_names,
            "alarm_arns": alarm_arns,
        }

        APP_LOGGER.info(msg="=" * 72)
        APP_LOGGER.info(msg="Quota sync complete.")
        APP_LOGGER.info(msg=f"  Models: {len(models)}  Quotas: {len(quotas)}")
        APP_LOGGER.info(msg=f"  Alarms written this run: {len(alarm_arns)}")
        APP_LOGGER.info(msg=f"  Dashboard: {summary['dashboard_url']}")
        APP_LOGGER.info(msg="=" * 72)

        return summary

    def preview(self) -> dict[str, Any]:
        """Render the dashboard and alarms without touching SNS or CloudWatch."""
        models = self._resolve_models()
        return {
            "dashboard_name": DASHBOARD_NAME,
            "dashboard": {"widgets": self.dashboards.build_widgets(models)},
            "alarms": self.alarms.build(_flatten(models), topic_arn=PREVIEW_TOPIC_ARN),
        }

    def get_quota_values(self) -> list[dict[str, Any]]:
        """Resolved quota values with their model association."""
        return [quota.as_dict() for quota in _flatten(self._resolve_models())]

    # ── helpers ────────────────────────────────────────────────────────────

    def _resolve_models(self) -> list[ModelQuotas]:
        values = self.lookup.fetch_all()
        models = self.lookup.group_by_model(values)
        for model in models:
            APP_LOGGER.info(
                msg=f"── {model.model_id}: "
                + ", ".join(f"{q.quota_code}={format_number(q.value)}" for q in model.quotas)
            )
        return models


def _flatten(models: list[ModelQuotas]) -> list[QuotaValue]:
    return [quota for model in models for quota in model.quotas]
