"""Manage all constants / shared ressources."""

import os

from helpers.logger import AppLogger
from helpers.utils import split_csv

# Generic Global Env Variables
TRUE_VALUES = ("true", "1", "yes")

# Debug Mode / Level for the Logger
DEBUG_MODE = os.environ.get("DEBUG_MODE", default="False").lower() in TRUE_VALUES
APP_LOGGER = AppLogger(debug=DEBUG_MODE)
APP_LOGGER.debug(msg="Debugger Up&Ready!")

# AWS Region used for every client and for the dashboard URL
AWS_REGION = os.environ.get("AWS_REGION") or os.environ.get(
    "AWS_DEFAULT_REGION", default="us-east-1"
)

# Service Quotas service code and CloudWatch namespace of the monitored service
QUOTA_SERVICE_CODE = os.environ.get("QUOTA_SERVICE_CODE", default="bedrock")
METRIC_NAMESPACE = os.environ.get("METRIC_NAMESPACE", default="AWS/Bedrock")
MODEL_DIMENSION = "ModelId"

# Provider resources
DASHBOARD_NAME = os.environ.get("DASHBOARD_NAME", default="BedrockQuotaDash")
ALARM_NAME_PREFIX = "bedrock-quota-alarm"
ALARM_TOPIC_NAME = os.environ.get(
    "ALARM_TOPIC_NAME", default="bedrock-quota-alarm-topic"
)
ALARM_TOPIC_DISPLAY_NAME = "Bedrock Quota Alarm Notifications"

# Comma-separated list of emails subscribed to the alarm topic
ALERT_RECEIVER_EMAILS: list[str] = split_csv(
    os.environ.get("ALERT_RECEIVER_EMAILS", default="")
)

# Alarm tiers: "single" (one alarm at 90 %) or "dual" (80 % slow / 95 % fast)
ALARM_POLICY = os.environ.get("ALARM_POLICY", default="dual").lower()
WARNING_THRESHOLD_PCT = float(os.environ.get("WARNING_THRESHOLD_PCT", default=80))
CRITICAL_THRESHOLD_PCT = float(os.environ.get("CRITICAL_THRESHOLD_PCT", default=95))
SINGLE_THRESHOLD_PCT = float(os.environ.get("SINGLE_THRESHOLD_PCT", default=90))

# Render everything but never write to CloudWatch / SNS
DRY_RUN_MODE = os.environ.get("DRY_RUN_MODE", default="False").lower() in TRUE_VALUES

APP_CONFIG = {
    "region": AWS_REGION,
    "quota_service_code": QUOTA_SERVICE_CODE,
    "metric_namespace": METRIC_NAMESPACE,
    "dashboard_name": DASHBOARD_NAME,
    "alarm_topic_name": ALARM_TOPIC_NAME,
    "alert_receivers": len(ALERT_RECEIVER_EMAILS),
    "alarm_policy": ALARM_POLICY,
    "warning_threshold_pct": WARNING_THRESHOLD_PCT,
    "critical_threshold_pct": CRITICAL_THRESHOLD_PCT,
    "single_threshold_pct": SINGLE_THRESHOLD_PCT,
    "dry_run": DRY_RUN_MODE,
    "debug": DEBUG_MODE,
}
