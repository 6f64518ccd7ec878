"""
Data processing functions for timezone features.

Every derived value depends only on a feature's own offset and the shared
reference instant, so annotation is order-preserving and repeatable.
"""

import math
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

import pandas as pd

from world_timezones.models import AnnotatedTimezone, TimezoneFeature, format_hours

INVALID_ZONE_POLICIES = ('skip', 'zero')

# Larger offsets are treated as unusable zone values
MAX_ZONE_OFFSET_HOURS = 24 * 7

DATAFRAME_COLUMNS = [
    'name',
    'utc_offset',
    'offset_minutes',
    'time_display',
    'time_ampm',
    'date_display',
    'hour_num',
    'is_night',
    'is_day',
    'offset_label',
    'is_user_tz',
]


def parse_zone_offset(value: Any) -> Optional[float]:
    """
    Parse a raw `zone` property into fractional hours.

    Args:
        value: Decimal string such as "5.75" or "-3", or a number

    Returns:
        Offset in hours, or None when the value is missing, not a finite number,
        or larger than MAX_ZONE_OFFSET_HOURS in either direction
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        offset = float(value)
    except (TypeError, ValueError):
        return None

    if not math.isfinite(offset) or abs(offset) > MAX_ZONE_OFFSET_HOURS:
        return None
    return offset


def offset_to_minutes(offset: float) -> int:
    """Convert fractional hours to whole minutes (5.75 -> 345)."""
    return int(round(offset * 60))


def local_time_for_offset(utc_now: datetime, offset_minutes: int) -> datetime:
    """Wall-clock time at a UTC offset, as a naive datetime."""
    return _as_utc(utc_now).replace(tzinfo=None) + timedelta(minutes=offset_minutes)


def classify_hour(hour: int) -> tuple[bool, bool]:
    """
    Rough day/night split by hour of day.

    Returns:
        Tuple of (is_night, is_day). Hours 6-7 and 18-19 are twilight and
        count as neither.
    """
    is_night = hour < 6 or hour >= 20
    is_day = 8 <= hour < 18
    return is_night, is_day


def format_offset_label(offset: float) -> str:
    """
    Format a UTC offset for display.

    Whole hours render as "UTC+5" / "UTC-3", half hours as "UTC+5:30" and
    three-quarter hours as "UTC+5:45". The fractional part is taken with a
    floored modulo, so -9.5 counts as a half hour but -3.75 does not match
    the ":45" case and renders as "UTC-3.75".
    """
    if offset == 0:
        return "UTC"

    fraction = offset % 1

    if fraction == 0:
        if offset > 0:
            return f"UTC+{int(offset)}"
        return f"UTC{int(offset)}"

    if fraction == 0.5:
        if offset > 0:
            return f"UTC+{math.floor(offset)}:30"
        return f"UTC{math.ceil(offset)}:30"

    if fraction == 0.75:
        if offset > 0:
            return f"UTC+{math.floor(offset)}:45"
        return f"UTC{math.ceil(offset)}:45"

    if offset > 0:
        return f"UTC+{format_hours(offset)}"
    return f"UTC{format_hours(offset)}"


def is_user_zone_offset(offset: float, user_offset_hours: float) -> bool:
    """True when an offset is within half an hour of the caller's offset."""
    return abs(offset - user_offset_hours) < 0.5


def annotate_feature(
    feature: TimezoneFeature,
    offset: float,
    utc_now: datetime,
    user_offset_hours: float = 0.0
) -> AnnotatedTimezone:
    """
    Compute the local time and display labels for one timezone feature.

    Args:
        feature: Source feature (geometry and properties are passed through)
        offset: Parsed UTC offset of the feature in hours
        utc_now: Shared reference instant
        user_offset_hours: The caller's resolved UTC offset

    Returns:
        AnnotatedTimezone for the feature
    """
    offset_minutes = offset_to_minutes(offset)
    local_time = local_time_for_offset(utc_now, offset_minutes)
    is_night, is_day = classify_hour(local_time.hour)

    return AnnotatedTimezone(
        raw_zone_offset=offset,
        offset_minutes=offset_minutes,
        local_time=local_time,
        time_24=local_time.strftime("%H:%M"),
        time_12=local_time.strftime("%I:%M %p"),
        date_label=local_time.strftime("%b %d"),
        is_night=is_night,
        is_day=is_day,
        offset_label=format_offset_label(offset),
        is_user_zone=is_user_zone_offset(offset, user_offset_hours),
        name=feature.name,
        geometry=feature.geometry,
        properties=feature.properties
    )


def annotate_features(
    features: Iterable[TimezoneFeature],
    utc_now: datetime,
    user_offset_hours: float = 0.0,
    invalid_zone_policy: str = 'skip'
) -> list[AnnotatedTimezone]:
    """
    Annotate timezone features against one reference instant.

    Args:
        features: Raw features in dataset order
        utc_now: Reference instant shared by every feature
        user_offset_hours: The caller's resolved UTC offset
        invalid_zone_policy: 'skip' drops features whose zone cannot be parsed,
            'zero' treats them as UTC

    Returns:
        Annotated features, in input order

    Raises:
        ValueError: If the policy is not recognised
    """
    if invalid_zone_policy not in INVALID_ZONE_POLICIES:
        raise ValueError(
            f"Unknown invalid_zone_policy '{invalid_zone_policy}'. "
            f"Expected one of: {', '.join(INVALID_ZONE_POLICIES)}"
        )

    utc_now = _as_utc(utc_now)
    annotated = []
    for feature in features:
        offset = parse_zone_offset(feature.zone)
        if offset is None:
            if invalid_zone_policy == 'skip':
                continue
            offset = 0.0
        annotated.append(annotate_feature(feature, offset, utc_now, user_offset_hours))

    return annotated


def annotations_to_dataframe(annotated: Iterable[AnnotatedTimezone]) -> pd.DataFrame:
    """
    Flatten annotated features into a DataFrame, one row per feature.

    Args:
        annotated: Annotated features

    Returns:
        DataFrame with DATAFRAME_COLUMNS, rows in input order
    """
    rows = [
        {
            'name': tz.name,
            'utc_offset': tz.raw_zone_offset,
            'offset_minutes': tz.offset_minutes,
            'time_display': tz.time_24,
            'time_ampm': tz.time_12,
            'date_display': tz.date_label,
            'hour_num': tz.local_hour,
            'is_night': tz.is_night,
            'is_day': tz.is_day,
            'offset_label': tz.offset_label,
            'is_user_tz': tz.is_user_zone,
        }
        for tz in annotated
    ]
    return pd.DataFrame(rows, columns=DATAFRAME_COLUMNS)


def summarize_annotations(annotated: Iterable[AnnotatedTimezone]) -> dict[str, int]:
    """
    Count features by day/night state.

    Returns:
        Dictionary with 'total', 'day', 'night', 'twilight' and 'user_zones'
    """
    df = annotations_to_dataframe(annotated)
    total = len(df)
    day = int(df['is_day'].sum())
    night = int(df['is_night'].sum())

    return {
        'total': total,
        'day': day,
        'night': night,
        'twilight': total - day - night,
        'user_zones': int(df['is_user_tz'].sum()),
    }


def _as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)
