from datetime import datetime
from typing import Mapping, Optional
from urllib.parse import unquote
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
from voicechat.schemas.chat_schemas import CallerContext

# Geo hints added by the edge layer in front of the app
COUNTRY_HEADER = "x-vercel-ip-country"
REGION_HEADER = "x-vercel-ip-country-region"
CITY_HEADER = "x-vercel-ip-city"
TIMEZONE_HEADER = "x-vercel-ip-timezone"


def resolve_location(headers: Mapping[str, str]) -> str:
    country = headers.get(COUNTRY_HEADER)
    region = headers.get(REGION_HEADER)
    city = headers.get(CITY_HEADER)

    if not country or not region or not city:
        return "unknown"

    return f"{unquote(city)}, {region}, {country}"


def resolve_time(headers: Mapping[str, str], now: Optional[datetime] = None) -> str:
    """Current time in the caller's timezone, formatted like `10/19/2026, 3:04:05 PM`."""
    tz = None
    tz_name = headers.get(TIMEZONE_HEADER)
    if tz_name:
        try:
            tz = ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError):
            tz = None

    now = now or datetime.now().astimezone()
    local = now.astimezone(tz) if tz else now.astimezone()

    hour = local.hour % 12 or 12
    meridiem = "AM" if local.hour < 12 else "PM"
    return (
        f"{local.month}/{local.day}/{local.year}, "
        f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
    )


def caller_context_from_headers(headers: Mapping[str, str], now: Optional[datetime] = None) -> CallerContext:
    return CallerContext(location=resolve_location(headers), local_time=resolve_time(headers, now))
