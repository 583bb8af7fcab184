from __future__ import annotations

import argparse
import importlib

from dotenv import load_dotenv

from timesheet_system.config import get_settings_module
from timesheet_system.database.bootstrap import reset_admin_user


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())

    parser = argparse.ArgumentParser(description="Delete and recreate the admin login.")
    parser.add_argument("--username", default=getattr(settings, "ADMIN_USERNAME", "admin"))
    parser.add_argument("--password", default=getattr(settings, "ADMIN_PASSWORD", None))
    args = parser.parse_args()
    if not args.password:
        parser.error("no admin password: pass --password or set ADMIN_PASSWORD")

    reset_admin_user(dict(settings.DB_CONFIG), username=args.username, password=args.password)
    print(f"OK: Admin user {args.username!r} recreated")


if __name__ == "__main__":
    main()
