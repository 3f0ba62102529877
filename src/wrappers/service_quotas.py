"""Wrapper for AWS Service Quotas – live quota values.

An account only has an "applied" quota once it differs from the AWS
default; for untouched quotas ``GetServiceQuota`` answers
``NoSuchResourceException`` and the default value is read instead.
"""

from typing import Any

import boto3
from botocore.exceptions import ClientError

from config.quotas import QuotaSetMismatchError, QuotaValue
from helpers.constants import APP_LOGGER, AWS_REGION, QUOTA_SERVICE_CODE


class WrapperServiceQuotas:
    """Fetch quota values from the Service Quotas API."""

    def __init__(
        self, region: str = AWS_REGION, service_code: str = QUOTA_SERVICE_CODE
    ) -> None:
        self.client = boto3.client("service-quotas", region_name=region)
        self.service_code = service_code
        # Cache: quota_code → QuotaValue
        self._cache: dict[str, QuotaValue] = {}
        APP_LOGGER.info(
            msg=f"Service Quotas wrapper initialised (service={service_code}, region={region})."
        )

    # ── public ────────────────────────────────────────────────────────────

    def get_quota_value(self, quota_code: str) -> QuotaValue:
        """Return the current value of ``quota_code`` (applied, else default)."""
        if quota_code in self._cache:
            return self._cache[quota_code]

        quota = self._get_applied_quota(quota_code)
        if quota is None:
            quota = self._get_default_quota(quota_code)

        if quota["QuotaCode"] != quota_code:
            APP_LOGGER.error(
                msg=f"Requested quota {quota_code} but got {quota['QuotaCode']}"
            )
            raise QuotaSetMismatchError(
                quota_code, f"was answered as '{quota['QuotaCode']}'"
            )

        value = QuotaValue(
            quota_code=quota["QuotaCode"],
            quota_name=quota["QuotaName"],
            value=float(quota["Value"]),
        )
        APP_LOGGER.debug(
            msg=f"Quota {value.quota_code} ({value.quota_name}) = {value.value}"
        )
        self._cache[quota_code] = value
        return value

    # ── internals ─────────────────────────────────────────────────────────

    def _get_applied_quota(self, quota_code: str) -> dict[str, Any] | None:
        try:
            response = self.client.get_service_quota(
                ServiceCode=self.service_code, QuotaCode=quota_code
            )
        except ClientError as exc:
            if exc.response.get("Error", {}).get("Code") == "NoSuchResourceException":
                APP_LOGGER.debug(
                    msg=f"No applied value for {quota_code}, using AWS default"
                )
                return None
            APP_LOGGER.error(msg=f"Error fetching quota {quota_code}: {exc}")
            raise
        return response["Quota"]

    def _get_default_quota(self, quota_code: str) -> dict[str, Any]:
        try:
            response = self.client.get_aws_default_service_quota(
                ServiceCode=self.service_code, QuotaCode=quota_code
            )
        except ClientError as exc:
            APP_LOGGER.error(msg=f"Error fetching default quota {quota_code}: {exc}")
            raise
        return response["Quota"]
