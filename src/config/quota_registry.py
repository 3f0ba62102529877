"""Registry of the Bedrock quotas to watch.

Each Service Quotas code maps to the model it applies to and the CloudWatch
metrics (namespace ``AWS/Bedrock``, dimension ``ModelId``) that count
against it.  Token-per-minute quotas sum input and output tokens; request
quotas follow ``Invocations``.

The table is fixed at import time and exposed read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from config.quotas import QuotaDefinition, UnknownQuotaCodeError

TOKEN_METRICS = ("InputTokenCount", "OutputTokenCount")
REQUEST_METRICS = ("Invocations",)

CLAUDE_3_5_SONNET_V2 = "us.anthropic.claude-3-5-sonnet-20241022-v2:0"
CLAUDE_3_7_SONNET = "us.anthropic.claude-3-7-sonnet-20250219-v1:0"
CLAUDE_3_HAIKU = "us.anthropic.claude-3-haiku-20240307-v1:0"

_DEFINITIONS: list[QuotaDefinition] = [
    # ─── Claude 3.5 Sonnet v2 ────────────────────────────────────────────
    QuotaDefinition("L-FF8B4E28", CLAUDE_3_5_SONNET_V2, TOKEN_METRICS),  # tokens/min
    QuotaDefinition("L-1D3E59A3", CLAUDE_3_5_SONNET_V2, REQUEST_METRICS),  # requests/min
    # ─── Claude 3.7 Sonnet ───────────────────────────────────────────────
    QuotaDefinition("L-6E888CC2", CLAUDE_3_7_SONNET, TOKEN_METRICS),
    QuotaDefinition("L-3D8CC480", CLAUDE_3_7_SONNET, REQUEST_METRICS),
    # ─── Claude 3 Haiku ──────────────────────────────────────────────────
    QuotaDefinition("L-DCADBC78", CLAUDE_3_HAIKU, TOKEN_METRICS),
    QuotaDefinition("L-616A3F5B", CLAUDE_3_HAIKU, REQUEST_METRICS),
]

QUOTA_DEFINITIONS: Mapping[str, QuotaDefinition] = MappingProxyType(
    {definition.quota_code: definition for definition in _DEFINITIONS}
)


class QuotaRegistry:
    """Read-only lookup over quota definitions, keyed by quota code."""

    def __init__(
        self, definitions: Mapping[str, QuotaDefinition] = QUOTA_DEFINITIONS
    ) -> None:
        self._definitions = MappingProxyType(dict(definitions))

    def get(self, quota_code: str) -> QuotaDefinition:
        """Return the definition for ``quota_code``; raise if it is unknown."""
        try:
            return self._definitions[quota_code]
        except KeyError:
            raise UnknownQuotaCodeError(quota_code) from None

    def codes(self) -> list[str]:
        return list(self._definitions)

    def models(self) -> list[str]:
        """Model ids in the order they first appear in the table."""
        return list(dict.fromkeys(d.model_id for d in self._definitions.values()))

    def __contains__(self, quota_code: object) -> bool:
        return quota_code in self._definitions

    def __iter__(self) -> Iterator[QuotaDefinition]:
        return iter(self._definitions.values())

    def __len__(self) -> int:
        return len(self._definitions)
