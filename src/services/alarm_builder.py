"""CloudWatch alarm generation – one alarm per (quota, threshold tier).

The output of :meth:`AlarmBuilder.build` is a list of keyword-argument
dicts ready for ``cloudwatch.put_metric_alarm``.  A quota counted by a
single metric gets a plain metric alarm; a quota counted by several
metrics (input + output tokens) gets a metric-math alarm whose expression
sums every constituent query.
"""

from __future__ import annotations

from typing import Any

from config.alarm_policy import ThresholdTier, get_alarm_policy
from config.quotas import QuotaValue
from helpers.constants import ALARM_NAME_PREFIX, METRIC_NAMESPACE, MODEL_DIMENSION
from helpers.utils import sum_expression


def alarm_name(quota_code: str, severity: str) -> str:
    return f"{ALARM_NAME_PREFIX}-{quota_code}-{severity}"


class AlarmBuilder:
    """Derive alarm definitions from quota values and a threshold policy."""

    def __init__(
        self,
        tiers: list[ThresholdTier] | None = None,
        namespace: str = METRIC_NAMESPACE,
    ) -> None:
        self.tiers = tiers if tiers is not None else get_alarm_policy()
        self.namespace = namespace

    def build(self, quotas: list[QuotaValue], topic_arn: str) -> list[dict[str, Any]]:
        return [
            self.build_alarm(quota, tier, topic_arn)
            for quota in quotas
            for tier in self.tiers
        ]

    def build_alarm(
        self, quota: QuotaValue, tier: ThresholdTier, topic_arn: str
    ) -> dict[str, Any]:
        definition = quota.definition
        alarm: dict[str, Any] = {
            "AlarmName": alarm_name(quota.quota_code, tier.severity),
            "AlarmDescription": (
                f"Alarm when Bedrock metrics exceed {tier.percentage * 100:g}% of quota "
                f"{quota.quota_name} ({quota.model_id}) over {tier.period}s"
            ),
            "ComparisonOperator": "GreaterThanThreshold",
            "EvaluationPeriods": 1,
            "Threshold": tier.threshold(quota.value),
            "AlarmActions": [topic_arn],
            "TreatMissingData": "notBreaching",
        }

        if definition.is_combined:
            alarm["Metrics"] = self._combined_queries(quota, tier)
        else:
            alarm.update(
                {
                    "Namespace": self.namespace,
                    "MetricName": definition.metrics[0],
                    "Dimensions": self._dimensions(quota.model_id),
                    "Period": tier.period,
                    "Statistic": "Sum",
                }
            )
        return alarm

    def _combined_queries(
        self, quota: QuotaValue, tier: ThresholdTier
    ) -> list[dict[str, Any]]:
        definition = quota.definition
        queries: list[dict[str, Any]] = [
            {
                "Id": "e1",
                "Expression": sum_expression(len(definition.metrics)),
                "Label": "Combined Metrics",
                "ReturnData": True,
            }
        ]
        for idx, metric in enumerate(definition.metrics):
            queries.append(
                {
                    "Id": f"m{idx}",
                    "MetricStat": {
                        "Metric": {
                            "Namespace": self.namespace,
                            "MetricName": metric,
                            "Dimensions": self._dimensions(quota.model_id),
                        },
                        "Period": tier.period,
                        "Stat": "Sum",
                    },
                    "ReturnData": False,
                }
            )
        return queries

    @staticmethod
    def _dimensions(model_id: str) -> list[dict[str, str]]:
        return [{"Name": MODEL_DIMENSION, "Value": model_id}]
