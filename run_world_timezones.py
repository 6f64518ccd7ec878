#!/usr/bin/env python3
"""
World Time Zones - Main Script

This script:
1. Loads configuration (config.ini or environment, all optional)
2. Resolves your timezone and UTC offset
3. Downloads the Natural Earth time zone polygons
4. Computes the current local time in every zone
5. Renders an interactive map and saves it as index.html
6. Opens the map in your browser
"""

from datetime import datetime, timezone

from world_timezones import NaturalEarthClient
from world_timezones.config_loader import load_config
from world_timezones.data_processing import annotate_features, summarize_annotations
from world_timezones.exporter import open_in_browser, write_map_html
from world_timezones.models import MapTheme
from world_timezones.timezone_utils import detect_local_timezone_name, resolve_local_observation
from world_timezones.visualization import create_timezone_map


def main():
    """Build the world time zones map."""

    # ==========================================
    # 1. Load Configuration
    # ==========================================
    try:
        settings = load_config()
    except ValueError as e:
        print(f"\n❌ Configuration Error:\n{e}\n")
        return

    # One reference instant for the whole run
    utc_now = datetime.now(timezone.utc)

    # ==========================================
    # 2. Resolve Local Timezone
    # ==========================================
    zone_name = detect_local_timezone_name(settings.timezone_name)
    observation = resolve_local_observation(utc_now, zone_name)

    if observation.timezone_name != zone_name:
        print(f"⚠️  Unknown timezone '{zone_name}', using {observation.timezone_name}")

    print(f"Your timezone: {observation.timezone_name}")
    print(f"Your current time: {observation.local_instant.strftime('%Y-%m-%d %H:%M:%S %Z')}")
    print(f"UTC offset: {observation.offset_display} hours")

    # ==========================================
    # 3. Fetch Time Zone Polygons
    # ==========================================
    print("\nFetching time zone polygons...")

    client = NaturalEarthClient(settings.dataset_url, timeout=settings.request_timeout)
    features = client.get_timezone_features()

    print(f"✓ Loaded {len(features)} time zone features")

    # ==========================================
    # 4. Compute Local Times
    # ==========================================
    annotated = annotate_features(
        features,
        utc_now,
        user_offset_hours=observation.utc_offset_hours,
        invalid_zone_policy=settings.invalid_zone_policy
    )

    skipped = len(features) - len(annotated)
    if skipped:
        print(f"⚠️  Skipped {skipped} features without a usable zone offset")

    summary = summarize_annotations(annotated)
    print(
        f"✓ {summary['total']} zones: {summary['day']} day, {summary['night']} night, "
        f"{summary['twilight']} dawn/dusk, {summary['user_zones']} matching your offset"
    )

    # ==========================================
    # 5. Render and Export
    # ==========================================
    print("\nRendering map...")

    theme = MapTheme(
        map_style=settings.map_style,
        zoom=settings.zoom,
        center_latitude=settings.center_latitude
    )
    fig = create_timezone_map(annotated, observation, theme=theme)
    output_path = write_map_html(fig, settings.output_file)

    print("\n" + "="*50)
    print("✅ SUCCESS!")
    print("="*50)
    print(f"\n🗺️  Map created: {output_path}")

    if settings.open_browser:
        open_in_browser(output_path)
    else:
        print(f"\n💡 To view the map, open {output_path.name} in your browser")


if __name__ == "__main__":
    main()
