"""
Timezone utilities: detect the caller's zone and derive its UTC offset.
"""

import os
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tzlocal import get_localzone_name

from world_timezones.models import LocalObservation

UTC_ZONE_NAME = 'UTC'


def detect_local_timezone_name(configured: Optional[str] = None) -> str:
    """Return the configured zone name, else TZ env, else the system zone, else UTC."""
    if configured:
        return configured

    tz_name = os.environ.get('TZ')
    if tz_name:
        return tz_name

    try:
        return get_localzone_name() or UTC_ZONE_NAME
    except (LookupError, ValueError, OSError):
        return UTC_ZONE_NAME


def get_zone(tz_name: Optional[str]) -> tuple[str, ZoneInfo]:
    """
    Look up a zone by name, falling back to UTC when it cannot be resolved.

    Returns:
        Tuple of (effective zone name, ZoneInfo)
    """
    if tz_name:
        try:
            return tz_name, ZoneInfo(tz_name)
        except (ZoneInfoNotFoundError, ValueError, OSError):
            pass
    return UTC_ZONE_NAME, ZoneInfo(UTC_ZONE_NAME)


def hour_fraction(moment: datetime) -> float:
    """Wall-clock hour of day with minutes as a fraction of an hour."""
    return moment.hour + moment.minute / 60


def normalize_offset_hours(offset: float) -> float:
    """Wrap an offset by 24 hours so it falls within (-12, +12]."""
    if offset > 12:
        offset -= 24
    if offset < -12:
        offset += 24
    return offset


def offset_from_wall_clock(local_hour: float, utc_hour: float) -> float:
    """
    Derive a UTC offset from two wall-clock readings of the same instant.

    Readings that straddle midnight are wrapped, so local 23.9 against
    UTC 0.1 gives -0.2 rather than 23.8.
    """
    return normalize_offset_hours(local_hour - utc_hour)


def resolve_local_observation(
    now: datetime,
    local_zone_name: Optional[str],
    use_direct_offset: bool = False
) -> LocalObservation:
    """
    Resolve the caller's timezone and UTC offset at a given instant.

    Args:
        now: The reference instant (naive values are taken as UTC)
        local_zone_name: IANA zone name; unknown names fall back to UTC
        use_direct_offset: Ask the zone for its offset instead of comparing
            wall-clock readings

    Returns:
        LocalObservation for the instant
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    zone_name, zone = get_zone(local_zone_name)
    local_instant = now.astimezone(zone)
    utc_instant = now.astimezone(timezone.utc)

    if use_direct_offset:
        offset = local_instant.utcoffset().total_seconds() / 3600
        offset = normalize_offset_hours(offset)
    else:
        offset = offset_from_wall_clock(hour_fraction(local_instant), hour_fraction(utc_instant))

    return LocalObservation(
        timezone_name=zone_name,
        local_instant=local_instant,
        utc_instant=utc_instant,
        utc_offset_hours=offset
    )
