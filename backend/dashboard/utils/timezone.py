from datetime import date, datetime, timezone, tzinfo
from zoneinfo import ZoneInfo

from dashboard.core.config import settings


def get_timezone(tz: tzinfo | str | None = None) -> tzinfo:
    if isinstance(tz, tzinfo):
        return tz
    return ZoneInfo(tz or settings.timezone)


def now_utc() -> datetime:
    return datetime.now(tz=timezone.utc)


def as_utc(ts: datetime) -> datetime:
    # naive values come back from the store and are always UTC
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def local_day(ts: datetime, tz: tzinfo) -> date:
    return as_utc(ts).astimezone(tz).date()


def iso_z(ts: datetime) -> str:
    return as_utc(ts).isoformat(timespec="milliseconds").replace("+00:00", "Z")
