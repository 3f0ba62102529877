"""Shared pytest fixtures used across all test modules."""

import os

import pytest

# Ensure required env vars are set for test imports
os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("DEBUG_MODE", "True")
os.environ.setdefault("DRY_RUN_MODE", "False")
os.environ.setdefault("ALARM_POLICY", "dual")
os.environ.setdefault("WARNING_THRESHOLD_PCT", "80")
os.environ.setdefault("CRITICAL_THRESHOLD_PCT", "95")
os.environ.setdefault("ALERT_RECEIVER_EMAILS", "")

from config.quota_registry import QuotaRegistry  # noqa: E402
from config.quotas import QuotaValue  # noqa: E402

# Values as Service Quotas would return them for a fresh account
QUOTA_FIXTURES = {
    "L-FF8B4E28": ("Cross-region model inference tokens per minute for Claude 3.5 Sonnet V2", 800000.0),
    "L-1D3E59A3": ("Cross-region model inference requests per minute for Claude 3.5 Sonnet V2", 500.0),
    "L-6E888CC2": ("Cross-region model inference tokens per minute for Claude 3.7 Sonnet", 1000000.0),
    "L-3D8CC480": ("Cross-region model inference requests per minute for Claude 3.7 Sonnet", 250.0),
    "L-DCADBC78": ("Cross-region model inference tokens per minute for Claude 3 Haiku", 4000000.0),
    "L-616A3F5B": ("Cross-region model inference requests per minute for Claude 3 Haiku", 2000.0),
}


def make_quota_value(code: str, with_definition: bool = False) -> QuotaValue:
    name, value = QUOTA_FIXTURES[code]
    definition = QuotaRegistry().get(code) if with_definition else None
    return QuotaValue(quota_code=code, quota_name=name, value=value, definition=definition)


@pytest.fixture
def registry() -> QuotaRegistry:
    return QuotaRegistry()


@pytest.fixture
def raw_quota_values() -> list[QuotaValue]:
    """Quota values as fetched, without registry definitions attached."""
    return [make_quota_value(code) for code in QUOTA_FIXTURES]


@pytest.fixture
def quota_values() -> list[QuotaValue]:
    """Quota values with their registry definitions attached."""
    return [make_quota_value(code, with_definition=True) for code in QUOTA_FIXTURES]


@pytest.fixture
def quota_value_factory():
    """Return ``make_quota_value`` for tests that stub the Service Quotas wrapper."""
    return make_quota_value
