"""Quota definitions, fetched quota values and the registry lookup error."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


class QuotaGuardError(Exception):
    """Base class for errors raised by Bedrock Quota Guard itself."""

    quota_code: str | None = None


class UnknownQuotaCodeError(QuotaGuardError, KeyError):
    """A quota code has no entry in the quota registry.

    Fatal configuration error: generation is aborted and no dashboard or
    alarm is written.
    """

    def __init__(self, quota_code: str) -> None:
        super().__init__(quota_code)
        self.quota_code = quota_code

    def __str__(self) -> str:
        return f"Quota code '{self.quota_code}' is not registered"


class QuotaSetMismatchError(QuotaGuardError):
    """Fetched values do not map one-to-one onto the registered quota codes.

    Raised when a registered code is missing, fetched twice, or answered
    under another code.  Generation is aborted before anything is written.
    """

    def __init__(self, quota_code: str, reason: str) -> None:
        super().__init__(quota_code, reason)
        self.quota_code = quota_code
        self.reason = reason

    def __str__(self) -> str:
        return f"Quota code '{self.quota_code}' {self.reason}"


@dataclass(frozen=True)
class QuotaDefinition:
    """A provider quota and the CloudWatch metrics that consume it."""

    # Service Quotas code (e.g. "L-FF8B4E28")
    quota_code: str

    # Bedrock model id used as the ``ModelId`` metric dimension
    model_id: str

    # Metric names summed against the quota, in display order
    metrics: tuple[str, ...]

    @property
    def is_combined(self) -> bool:
        """True when several metrics are summed against the same quota."""
        return len(self.metrics) > 1

    def as_dict(self) -> dict[str, Any]:
        return {"modelId": self.model_id, "metrics": list(self.metrics)}


@dataclass(frozen=True)
class QuotaValue:
    """Current value of a quota as returned by Service Quotas."""

    quota_code: str
    quota_name: str
    value: float
    definition: QuotaDefinition | None = field(default=None, compare=False)

    @property
    def model_id(self) -> str:
        if self.definition is None:
            raise UnknownQuotaCodeError(self.quota_code)
        return self.definition.model_id

    def as_dict(self) -> dict[str, Any]:
        return {
            "quotaCode": self.quota_code,
            "quotaName": self.quota_name,
            "value": self.value,
            "modelInfo": self.definition.as_dict() if self.definition else None,
        }


@dataclass
class ModelQuotas:
    """All quota values of one model, in registry order."""

    model_id: str
    quotas: list[QuotaValue] = field(default_factory=list)

    @property
    def metrics(self) -> list[str]:
        """Distinct metric names across the model's quotas, first-seen order."""
        seen: list[str] = []
        for quota in self.quotas:
            for metric in quota.definition.metrics:
                if metric not in seen:
                    seen.append(metric)
        return seen
