"""One-shot entry point: sync quotas, dashboard and alarms, print the outputs."""

import json
import sys

from config.quotas import QuotaGuardError
from helpers.constants import APP_LOGGER
from services.quota_monitor import QuotaMonitorService


def main() -> int:
    try:
        summary = QuotaMonitorService().run_sync()
    except QuotaGuardError as exc:
        APP_LOGGER.error(msg=f"Aborted: {exc}", quota_code=exc.quota_code)
        return 1
    except Exception as exc:
        APP_LOGGER.error(msg=f"Quota sync failed: {exc}")
        return 1

    print(json.dumps(summary, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
