"""
Client for downloading the Natural Earth timezone dataset.
"""

from typing import Any

import requests

from world_timezones.models import TimezoneFeature

DEFAULT_TIMEZONES_URL = (
    "https://github.com/nvkelso/natural-earth-vector/raw/master/geojson/"
    "ne_10m_time_zones.geojson"
)


class DatasetError(ValueError):
    """Raised when the downloaded document is not a usable feature collection."""


class NaturalEarthClient:
    """Client for fetching timezone polygons as GeoJSON."""

    def __init__(self, url: str = DEFAULT_TIMEZONES_URL, timeout: float = 60):
        """
        Initialize dataset client.

        Args:
            url: Location of the timezone GeoJSON file
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

    def fetch_geojson(self) -> dict[str, Any]:
        """
        Download the timezone GeoJSON document.

        Returns:
            Decoded GeoJSON document

        Raises:
            requests.RequestException: If the request fails
        """
        response = requests.get(self.url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def get_timezone_features(self) -> list[TimezoneFeature]:
        """Download the dataset and return its features."""
        return parse_features(self.fetch_geojson())


def parse_features(geojson: Any) -> list[TimezoneFeature]:
    """
    Extract timezone features from a GeoJSON feature collection.

    Args:
        geojson: Decoded GeoJSON document

    Returns:
        List of TimezoneFeature in document order

    Raises:
        DatasetError: If the document has no list of features
    """
    if not isinstance(geojson, dict):
        raise DatasetError("Timezone dataset is not a JSON object")

    features = geojson.get('features')
    if not isinstance(features, list):
        raise DatasetError("Timezone dataset has no 'features' list")

    parsed = []
    for feature in features:
        if not isinstance(feature, dict):
            raise DatasetError(f"Timezone dataset contains a non-object feature: {feature!r}")

        properties = feature.get('properties') or {}
        parsed.append(TimezoneFeature(
            zone=properties.get('zone'),
            geometry=feature.get('geometry'),
            properties=properties
        ))

    return parsed
