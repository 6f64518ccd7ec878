"""
World Time Zones Package

Render an interactive world map of time zones showing the current local time
in each zone, centered on the caller's own timezone.
"""

from world_timezones.api_client import NaturalEarthClient
from world_timezones.data_processing import (
    annotate_features,
    annotations_to_dataframe,
    format_offset_label,
)
from world_timezones.models import AnnotatedTimezone, LocalObservation, TimezoneFeature
from world_timezones.timezone_utils import resolve_local_observation

__version__ = "0.1.0"
__all__ = [
    "NaturalEarthClient",
    "AnnotatedTimezone",
    "LocalObservation",
    "TimezoneFeature",
    "annotate_features",
    "annotations_to_dataframe",
    "format_offset_label",
    "resolve_local_observation",
]
