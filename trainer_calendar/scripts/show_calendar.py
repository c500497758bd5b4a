from __future__ import annotations

import argparse
import asyncio

from trainer_calendar.core.config import get_settings
from trainer_calendar.services.api_client import ApiClient, AuthSession
from trainer_calendar.services.calendar_data import CalendarDataLoader
from trainer_calendar.services.date_utils import SHORT_WEEKDAY_NAMES, get_day_of_week, local_today

FILTERS = ["all", "booked", "blocked", "available", "not_available", "tentative"]


async def show(args: argparse.Namespace) -> int:
    settings = get_settings()
    client = ApiClient(settings.backend_api_url, AuthSession(args.token), timeout=settings.backend_timeout_seconds)
    loader = CalendarDataLoader(client)

    await loader.load_month(args.trainer_id, args.year, args.month)
    if loader.error:
        print(f"error: {loader.error}")
        return 1

    result = loader.build_month(args.year, args.month, args.filter)
    print(f"{result.month_name} {result.year}")
    for day in result.days:
        if day.is_filtered:
            continue
        marker = "*" if day.is_today else " "
        weekday = SHORT_WEEKDAY_NAMES[get_day_of_week(day.date)]
        print(f"{marker}{day.date_string} {weekday} {day.status:<13} bookings={len(day.bookings)}")

    counts = result.counts.model_dump()
    print(" ".join(f"{k}={v}" for k, v in counts.items()))
    if result.pending_bookings:
        print(f"pending approval: {len(result.pending_bookings)}")
    return 0


def main() -> int:
    today = local_today()
    p = argparse.ArgumentParser(description="Print a trainer's month calendar")
    p.add_argument("--trainer-id", required=True)
    p.add_argument("--year", type=int, default=today.year)
    p.add_argument("--month", type=int, default=today.month)
    p.add_argument("--token", default="", help="Bearer token issued by the backend")
    p.add_argument("--filter", choices=FILTERS, default="all")
    args = p.parse_args()

    return asyncio.run(show(args))


if __name__ == "__main__":
    raise SystemExit(main())
