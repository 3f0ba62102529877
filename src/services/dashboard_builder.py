"""CloudWatch dashboard generation.

One horizontal band per model, in discovery order.  Within a band the
widgets run left to right:

  [quota 1] [quota 2] ... [peak usage] [daily total]

Each quota widget is a time series of the quota's metrics (plus a summed
"Total" line when it has several) with the quota value drawn as a
horizontal annotation.  The layout is a fixed grid: ``x`` is
``WIDGET_WIDTH * column`` and ``y`` is ``ROW_HEIGHT * row``.  A band never
wraps, so a model with more quotas than fit in ``GRID_WIDTH`` raises
:class:`DashboardLayoutError` instead of placing widgets off the grid.
"""

from __future__ import annotations

import json
from typing import Any

from config.quotas import ModelQuotas, QuotaGuardError, QuotaValue
from helpers.constants import AWS_REGION, METRIC_NAMESPACE, MODEL_DIMENSION
from helpers.utils import format_number, sum_expression

# CloudWatch dashboards are 24 grid units wide
GRID_WIDTH = 24
WIDGET_WIDTH = 6
WIDGET_HEIGHT = 6
ROW_HEIGHT = WIDGET_HEIGHT

TIME_SERIES_PERIOD = 60
ONE_DAY = 24 * 60 * 60
PEAK_STAT = "p99"

TOTAL_COLOR = "#1f77b4"
QUOTA_COLOR = "#ff9900"


class DashboardLayoutError(QuotaGuardError):
    """A model has more quotas than fit in one dashboard band."""

    def __init__(self, model_id: str, quota_count: int) -> None:
        super().__init__(model_id, quota_count)
        self.model_id = model_id
        self.quota_count = quota_count

    def __str__(self) -> str:
        return (
            f"Model '{self.model_id}' has {self.quota_count} quotas; at most "
            f"{max_quotas_per_model()} fit in a {GRID_WIDTH}-unit dashboard row"
        )


def max_quotas_per_model() -> int:
    return GRID_WIDTH // WIDGET_WIDTH - 2


class DashboardBuilder:
    """Build the widget list and JSON body of the quota dashboard."""

    def __init__(
        self, region: str = AWS_REGION, namespace: str = METRIC_NAMESPACE
    ) -> None:
        self.region = region
        self.namespace = namespace

    def build_widgets(self, models: list[ModelQuotas]) -> list[dict[str, Any]]:
        widgets: list[dict[str, Any]] = []
        for row, model in enumerate(models):
            widgets.extend(self._build_row(model, y=row * ROW_HEIGHT))
        return widgets

    def render_body(self, models: list[ModelQuotas]) -> str:
        return json.dumps({"widgets": self.build_widgets(models)})

    # ── rows ──────────────────────────────────────────────────────────────

    def _build_row(self, model: ModelQuotas, y: int) -> list[dict[str, Any]]:
        if len(model.quotas) > max_quotas_per_model():
            raise DashboardLayoutError(model.model_id, len(model.quotas))

        row = [
            self._quota_widget(quota, x=col * WIDGET_WIDTH, y=y)
            for col, quota in enumerate(model.quotas)
        ]
        col = len(model.quotas)
        row.append(self._peak_widget(model, x=col * WIDGET_WIDTH, y=y))
        row.append(self._daily_total_widget(model, x=(col + 1) * WIDGET_WIDTH, y=y))
        return row

    # ── widgets ───────────────────────────────────────────────────────────

    def _quota_widget(self, quota: QuotaValue, x: int, y: int) -> dict[str, Any]:
        definition = quota.definition
        metrics: list[list[Any]] = [
            [self.namespace, metric, MODEL_DIMENSION, quota.model_id, {"id": f"m{idx}"}]
            for idx, metric in enumerate(definition.metrics)
        ]
        if definition.is_combined:
            metrics.append(
                [
                    {
                        "expression": sum_expression(len(definition.metrics)),
                        "label": "Total",
                        "color": TOTAL_COLOR,
                    }
                ]
            )

        return self._widget(
            x,
            y,
            {
                "metrics": metrics,
                "view": "timeSeries",
                "period": TIME_SERIES_PERIOD,
                "stat": "Sum",
                "region": self.region,
                "title": f"{quota.quota_name} ({quota.quota_code}) - {quota.model_id}",
                "annotations": {
                    "horizontal": [
                        {
                            "label": f"Quota: {format_number(quota.value)}",
                            "value": quota.value,
                            "color": QUOTA_COLOR,
                        }
                    ]
                },
            },
        )

    def _peak_widget(self, model: ModelQuotas, x: int, y: int) -> dict[str, Any]:
        return self._widget(
            x,
            y,
            {
                "metrics": self._model_metrics(model),
                "view": "singleValue",
                "period": TIME_SERIES_PERIOD,
                "stat": PEAK_STAT,
                "setPeriodToTimeRange": True,
                "region": self.region,
                "title": f"Peak usage ({PEAK_STAT}) - {model.model_id}",
            },
        )

    def _daily_total_widget(self, model: ModelQuotas, x: int, y: int) -> dict[str, Any]:
        return self._widget(
            x,
            y,
            {
                "metrics": self._model_metrics(model),
                "view": "singleValue",
                "period": ONE_DAY,
                "stat": "Sum",
                "region": self.region,
                "title": f"Daily total - {model.model_id}",
            },
        )

    def _model_metrics(self, model: ModelQuotas) -> list[list[str]]:
        return [
            [self.namespace, metric, MODEL_DIMENSION, model.model_id]
            for metric in model.metrics
        ]

    @staticmethod
    def _widget(x: int, y: int, properties: dict[str, Any]) -> dict[str, Any]:
        return {
            "type": "metric",
            "x": x,
            "y": y,
            "width": WIDGET_WIDTH,
            "height": WIDGET_HEIGHT,
            "properties": properties,
        }
