"""
Configuration loader for the world time zones map.

Supports loading configuration from:
1. config.ini file ([Map] section)
2. Environment variables (for automation/Docker)

Every setting has a default, so running without any configuration works.
"""

import configparser
import os
from dataclasses import dataclass
from typing import Optional

from world_timezones.api_client import DEFAULT_TIMEZONES_URL
from world_timezones.data_processing import INVALID_ZONE_POLICIES

TRUE_VALUES = ('1', 'true', 'yes', 'on')
FALSE_VALUES = ('0', 'false', 'no', 'off')


@dataclass
class MapSettings:
    """Settings for building the timezone map."""

    # None means detect from TZ / the operating system
    timezone_name: Optional[str] = None

    dataset_url: str = DEFAULT_TIMEZONES_URL
    request_timeout: float = 60

    # Written to the working directory and overwritten on each run
    output_file: str = 'index.html'
    open_browser: bool = True

    # What to do with features whose zone offset can't be parsed: skip or zero
    invalid_zone_policy: str = 'skip'

    map_style: str = 'carto-darkmatter'
    zoom: float = 3
    center_latitude: float = 30


def parse_bool(value: str, name: str) -> bool:
    """
    Parse a boolean flag from a string.

    Raises:
        ValueError: If the value isn't a recognised true/false word
    """
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid value for {name}: '{value}' (expected true/false)")


def parse_float(value: str, name: str) -> float:
    """
    Parse a number from a string.

    Raises:
        ValueError: If the value isn't numeric
    """
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"Invalid value for {name}: '{value}' (expected a number)")


class ConfigLoader:
    """Load configuration from various sources."""

    def __init__(self, config_file: str = "config.ini"):
        """
        Initialize config loader.

        Args:
            config_file: Path to config file (default: config.ini)
        """
        self.config_file = config_file
        self.config = None

    def load_from_file(self) -> bool:
        """
        Load configuration from INI file.

        Returns:
            True if file was loaded successfully, False otherwise
        """
        if not os.path.exists(self.config_file):
            return False

        self.config = configparser.ConfigParser()
        self.config.read(self.config_file)
        return True

    def get_settings(self) -> MapSettings:
        """
        Get map settings.

        Returns:
            MapSettings with configured values

        Raises:
            ValueError: If a configured value is invalid
        """
        settings = MapSettings()

        # Try config file first
        if self.config and self.config.has_section('Map'):
            try:
                section = self.config['Map']
                settings.timezone_name = section.get('timezone', fallback='').strip() or None
                settings.dataset_url = section.get('dataset_url', fallback=settings.dataset_url)
                settings.request_timeout = section.getfloat('request_timeout', fallback=settings.request_timeout)
                settings.output_file = section.get('output_file', fallback=settings.output_file)
                settings.open_browser = section.getboolean('open_browser', fallback=settings.open_browser)
                settings.invalid_zone_policy = section.get(
                    'invalid_zone_policy', fallback=settings.invalid_zone_policy
                ).strip().lower()
                settings.map_style = section.get('map_style', fallback=settings.map_style)
                settings.zoom = section.getfloat('zoom', fallback=settings.zoom)
                settings.center_latitude = section.getfloat('center_latitude', fallback=settings.center_latitude)
            except ValueError as e:
                raise ValueError(f"Invalid config file: {e}")

            self._validate(settings)
            return settings

        # Try environment variables
        settings.timezone_name = os.getenv('WORLD_TZ_TIMEZONE') or None
        settings.dataset_url = os.getenv('WORLD_TZ_DATASET_URL', settings.dataset_url)
        settings.output_file = os.getenv('WORLD_TZ_OUTPUT_FILE', settings.output_file)
        settings.invalid_zone_policy = os.getenv(
            'WORLD_TZ_INVALID_ZONE_POLICY', settings.invalid_zone_policy
        ).strip().lower()
        settings.map_style = os.getenv('WORLD_TZ_MAP_STYLE', settings.map_style)

        open_browser = os.getenv('WORLD_TZ_OPEN_BROWSER')
        if open_browser is not None:
            settings.open_browser = parse_bool(open_browser, 'WORLD_TZ_OPEN_BROWSER')

        for attr, env_name in (
            ('request_timeout', 'WORLD_TZ_REQUEST_TIMEOUT'),
            ('zoom', 'WORLD_TZ_ZOOM'),
            ('center_latitude', 'WORLD_TZ_CENTER_LATITUDE'),
        ):
            value = os.getenv(env_name)
            if value is not None:
                setattr(settings, attr, parse_float(value, env_name))

        self._validate(settings)
        return settings

    @staticmethod
    def _validate(settings: MapSettings) -> None:
        if settings.invalid_zone_policy not in INVALID_ZONE_POLICIES:
            raise ValueError(
                f"Invalid invalid_zone_policy '{settings.invalid_zone_policy}'. "
                f"Expected one of: {', '.join(INVALID_ZONE_POLICIES)}"
            )
        if settings.request_timeout <= 0:
            raise ValueError("request_timeout must be greater than zero")
        if not settings.output_file:
            raise ValueError("output_file must not be empty")


def load_config(config_file: str = "config.ini") -> MapSettings:
    """
    Convenience function to load all configuration.

    Args:
        config_file: Path to config file

    Returns:
        MapSettings

    Raises:
        ValueError: If configuration is invalid
    """
    loader = ConfigLoader(config_file)
    loader.load_from_file()
    return loader.get_settings()
