"""
Data models and configuration classes for the world time zones map.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class LocalObservation:
    """The caller's timezone, observed once per run."""

    timezone_name: str
    local_instant: datetime
    utc_instant: datetime
    utc_offset_hours: float

    @property
    def center_longitude(self) -> float:
        """Approximate longitude of the caller's zone (15 degrees per hour)."""
        return self.utc_offset_hours * 15

    @property
    def offset_display(self) -> str:
        """Offset in hours for console output, e.g. '+5.5' or '-3'."""
        hours = format_hours(self.utc_offset_hours)
        return f"+{hours}" if self.utc_offset_hours >= 0 else hours

    @property
    def panel_offset_label(self) -> str:
        """Rounded offset label shown in the info panel, e.g. 'UTC+6'."""
        sign = "+" if self.utc_offset_hours >= 0 else ""
        return f"UTC{sign}{int(round(self.utc_offset_hours))}"


@dataclass(frozen=True)
class TimezoneFeature:
    """One polygon from the timezone dataset, before annotation."""

    zone: Any
    geometry: Optional[dict] = None
    properties: dict = field(default_factory=dict)

    @property
    def name(self) -> str:
        """Best-effort display name from the source properties."""
        for key in ('time_zone', 'tz_name1st', 'name'):
            value = self.properties.get(key)
            if value:
                return str(value)
        return ''


@dataclass(frozen=True)
class AnnotatedTimezone:
    """A timezone feature with its local time and display labels."""

    raw_zone_offset: float
    offset_minutes: int
    local_time: datetime
    time_24: str
    time_12: str
    date_label: str
    is_night: bool
    is_day: bool
    offset_label: str
    is_user_zone: bool
    name: str = ''
    geometry: Optional[dict] = None
    properties: dict = field(default_factory=dict)

    @property
    def local_hour(self) -> int:
        return self.local_time.hour


@dataclass
class MapTheme:
    """Theme configuration for the timezone map."""

    # Dawn to dusk gradient, one stop every two hours from UTC-12 to UTC+12
    palette: tuple = (
        '#1e3a5f',  # UTC-12 (deep night blue)
        '#2d4a6f',  # UTC-10
        '#3d5a7f',  # UTC-8
        '#5a7a9f',  # UTC-6
        '#7a9abf',  # UTC-4
        '#9abadf',  # UTC-2
        '#f0f4f8',  # UTC (neutral dawn)
        '#ffe4b5',  # UTC+2
        '#ffc987',  # UTC+4
        '#ffaa5c',  # UTC+6
        '#ff8533',  # UTC+8
        '#ff5500',  # UTC+10
        '#cc3300',  # UTC+12
    )
    palette_values: tuple = (-12, -10, -8, -6, -4, -2, 0, 2, 4, 6, 8, 10, 12)
    legend_values: tuple = (-12, -6, 0, 6, 12)
    map_style: str = 'carto-darkmatter'
    center_latitude: float = 30
    zoom: float = 3
    fill_opacity: float = 0.7
    line_color: str = '#ffffff'
    line_width: float = 0.8
    user_zone_color: str = '#ffc864'
    user_zone_line_width: float = 2.5
    paper_bgcolor: str = '#000000'
    text_color: str = 'white'
    panel_bgcolor: str = 'rgba(20, 20, 30, 0.95)'
    panel_bordercolor: str = 'rgba(255, 255, 255, 0.1)'
    tooltip_bgcolor: str = '#1a1a2e'

    def get_layout_config(self, center_longitude: float, height: Optional[int] = None) -> dict:
        """Get layout configuration dictionary for the plotly map figure."""
        config = {
            'paper_bgcolor': self.paper_bgcolor,
            'font': dict(color=self.text_color),
            'margin': dict(l=0, r=0, t=0, b=0),
            'map': dict(
                style=self.map_style,
                center=dict(lon=center_longitude, lat=self.center_latitude),
                zoom=self.zoom
            ),
            'hoverlabel': dict(
                bgcolor=self.tooltip_bgcolor,
                bordercolor='rgba(255, 255, 255, 0.2)',
                font=dict(family='system-ui', color=self.text_color)
            )
        }
        if height:
            config['height'] = height
        return config


def format_hours(value: float) -> str:
    """Shortest decimal rendering of a number of hours ('5', '5.75', '-9.5')."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return format(value, '.15g')
