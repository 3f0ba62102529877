"""Fetch live quota values and group them by model."""

from __future__ import annotations

from config.quota_registry import QuotaRegistry
from config.quotas import ModelQuotas, QuotaSetMismatchError, QuotaValue
from helpers.constants import APP_LOGGER
from wrappers.service_quotas import WrapperServiceQuotas


class QuotaLookupService:
    """Resolve every registered quota code to its current value."""

    def __init__(
        self,
        registry: QuotaRegistry | None = None,
        service_quotas: WrapperServiceQuotas | None = None,
    ) -> None:
        self.registry = registry or QuotaRegistry()
        self.service_quotas = service_quotas or WrapperServiceQuotas()

    def fetch_all(self) -> list[QuotaValue]:
        """Return one QuotaValue per registered code, in registry order."""
        values = [self.service_quotas.get_quota_value(code) for code in self.registry.codes()]
        APP_LOGGER.info(msg=f"Fetched {len(values)} quota value(s).")
        return values

    def group_by_model(self, values: list[QuotaValue]) -> list[ModelQuotas]:
        """Attach definitions and group values per model, in discovery order.

        Raises ``UnknownQuotaCodeError`` on the first code missing from the
        registry and ``QuotaSetMismatchError`` when a registered code is
        fetched twice or not at all; nothing is returned in either case.
        """
        seen: set[str] = set()
        groups: dict[str, ModelQuotas] = {}
        for value in values:
            definition = self.registry.get(value.quota_code)
            if value.quota_code in seen:
                raise QuotaSetMismatchError(value.quota_code, "was fetched more than once")
            seen.add(value.quota_code)
            resolved = QuotaValue(
                quota_code=value.quota_code,
                quota_name=value.quota_name,
                value=value.value,
                definition=definition,
            )
            group = groups.setdefault(
                definition.model_id, ModelQuotas(model_id=definition.model_id)
            )
            group.quotas.append(resolved)

        for quota_code in self.registry.codes():
            if quota_code not in seen:
                raise QuotaSetMismatchError(quota_code, "has no fetched value")
        return list(groups.values())
