"""Small helpers shared by config and wrappers."""


def split_csv(raw: str) -> list[str]:
    """Split a comma-separated env value, dropping blanks and whitespace."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def dashboard_url(region: str, dashboard_name: str) -> str:
    """Return the CloudWatch console URL of a dashboard."""
    return (
        f"https://{region}.console.aws.amazon.com/cloudwatch/home"
        f"?region={region}#dashboards:name={dashboard_name}"
    )


def sum_expression(metric_count: int) -> str:
    """Return the metric-math expression summing ``m0`` .. ``m{n-1}``."""
    return "+".join(f"m{idx}" for idx in range(metric_count))


def format_number(value: float) -> str:
    """Render whole floats without a trailing ``.0`` (``500.0`` → ``"500"``)."""
    return str(int(value)) if float(value).is_integer() else str(value)
