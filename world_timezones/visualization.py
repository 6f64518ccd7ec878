"""
Visualization functions for the world time zones map.
"""

import html
from typing import Optional, Sequence

import plotly.graph_objects as go

from world_timezones.data_processing import annotations_to_dataframe
from world_timezones.models import AnnotatedTimezone, LocalObservation, MapTheme

MAP_TITLE = 'World Time Zones'

# Passed to plotly when the figure is written out
MAP_CONFIG = {
    'scrollZoom': True,
    'displaylogo': False,
    'displayModeBar': True,
    'responsive': True,
}

TOOLTIP_COLUMNS = ['time_display', 'time_ampm', 'date_display', 'offset_label']


def build_colorscale(theme: Optional[MapTheme] = None) -> list[list]:
    """
    Convert the theme palette into a plotly colorscale.

    Palette values are spread over [0, 1] relative to the first and last value.
    """
    if theme is None:
        theme = MapTheme()

    low = theme.palette_values[0]
    high = theme.palette_values[-1]
    return [
        [(value - low) / (high - low), color]
        for value, color in zip(theme.palette_values, theme.palette)
    ]


def format_legend_ticks(values: Sequence[float]) -> list[str]:
    """Legend tick labels with an explicit '+' for positive offsets."""
    return [f"+{value:g}" if value > 0 else f"{value:g}" for value in values]


def build_render_geojson(annotated: Sequence[AnnotatedTimezone]) -> dict:
    """
    Build a feature collection for plotly with one id per annotated feature.

    Geometry and source properties are carried over unchanged.
    """
    return {
        'type': 'FeatureCollection',
        'features': [
            {
                'type': 'Feature',
                'id': str(index),
                'geometry': tz.geometry,
                'properties': tz.properties,
            }
            for index, tz in enumerate(annotated)
        ],
    }


def build_tooltip_template() -> str:
    """Hover template reading the columns in TOOLTIP_COLUMNS from customdata."""
    return (
        "<span style='font-size:32px'><b>%{customdata[0]}</b></span><br>"
        "<span style='font-size:13px;color:#888'>%{customdata[1]}</span><br>"
        "<span style='font-size:13px;color:#aaa'>%{customdata[2]}</span><br>"
        "<span style='font-size:14px;color:#ffc864'><b>%{customdata[3]}</b></span>"
        "<extra></extra>"
    )


def build_info_panel_html(observation: LocalObservation) -> str:
    """
    Build the info panel text for the caller's own time.

    Args:
        observation: The caller's resolved timezone

    Returns:
        Plotly-compatible HTML snippet
    """
    local_time = observation.local_instant.strftime("%H:%M")
    zone = html.escape(observation.timezone_name)

    return (
        f"<span style='font-size:18px'><b>{MAP_TITLE}</b></span><br><br>"
        "<span style='font-size:11px;color:#ffc864'>YOUR TIME</span><br>"
        f"<span style='font-size:24px'><b>{local_time}</b></span><br>"
        f"<span style='font-size:12px;color:#aaa'>{zone} ({observation.panel_offset_label})</span><br><br>"
        "<span style='font-size:12px;color:#888'>Hover over any zone to see its current time.<br>"
        "Colors shift from cool (behind UTC) to warm (ahead of UTC).</span><br><br>"
        "<span style='font-size:10px;color:#555'>Source: Natural Earth</span>"
    )


def create_timezone_map(
    annotated: Sequence[AnnotatedTimezone],
    observation: LocalObservation,
    theme: Optional[MapTheme] = None,
    height: Optional[int] = None
) -> go.Figure:
    """
    Create an interactive choropleth map of the world's time zones.

    Args:
        annotated: Annotated timezone features
        observation: The caller's resolved timezone, used for framing and the info panel
        theme: Optional map theme configuration
        height: Optional fixed figure height in pixels

    Returns:
        Plotly figure object
    """
    if theme is None:
        theme = MapTheme()

    df = annotations_to_dataframe(annotated)
    geojson = build_render_geojson(annotated)
    locations = [feature['id'] for feature in geojson['features']]

    fig = go.Figure()

    fig.add_trace(go.Choroplethmap(
        geojson=geojson,
        locations=locations,
        z=df['utc_offset'],
        zmin=theme.palette_values[0],
        zmax=theme.palette_values[-1],
        colorscale=build_colorscale(theme),
        marker=dict(
            opacity=theme.fill_opacity,
            line=dict(color=theme.line_color, width=theme.line_width)
        ),
        customdata=df[TOOLTIP_COLUMNS].to_numpy(),
        hovertemplate=build_tooltip_template(),
        colorbar=dict(
            title=dict(text='UTC Offset', side='top'),
            tickvals=list(theme.legend_values),
            ticktext=format_legend_ticks(theme.legend_values),
            orientation='h',
            x=0.01,
            xanchor='left',
            y=0.02,
            yanchor='bottom',
            len=0.3,
            thickness=12,
            bgcolor=theme.panel_bgcolor,
            tickfont=dict(color=theme.text_color)
        ),
        name='Time zones'
    ))

    # Outline the zones that share the caller's offset
    user_mask = df['is_user_tz'].astype(bool)
    if user_mask.any():
        user_locations = [loc for loc, is_user in zip(locations, user_mask) if is_user]
        fig.add_trace(go.Choroplethmap(
            geojson=geojson,
            locations=user_locations,
            z=[1] * len(user_locations),
            colorscale=[[0, 'rgba(0,0,0,0)'], [1, 'rgba(0,0,0,0)']],
            showscale=False,
            marker=dict(line=dict(color=theme.user_zone_color, width=theme.user_zone_line_width)),
            hoverinfo='skip',
            name='Your time zone'
        ))

    layout_config = theme.get_layout_config(observation.center_longitude, height)
    layout_config['annotations'] = [
        dict(
            text=build_info_panel_html(observation),
            xref='paper',
            yref='paper',
            x=0.01,
            y=0.99,
            xanchor='left',
            yanchor='top',
            align='left',
            showarrow=False,
            bgcolor=theme.panel_bgcolor,
            bordercolor=theme.panel_bordercolor,
            borderwidth=1,
            borderpad=12,
            font=dict(family='-apple-system, BlinkMacSystemFont, Segoe UI, Roboto, sans-serif', color='#fff')
        )
    ]
    fig.update_layout(**layout_config)

    return fig
