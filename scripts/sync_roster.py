from __future__ import annotations

import importlib
import json
import logging

from dotenv import load_dotenv

from timesheet_system.config import get_settings_module
from timesheet_system.container import build_container_from_settings


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    logging.basicConfig(level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper())

    container = build_container_from_settings(settings)
    report = container.roster_sync.run()

    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    if report.errors:
        raise SystemExit(1)


if __name__ == "__main__":
    main()
