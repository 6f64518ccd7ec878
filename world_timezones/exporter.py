"""
Export the rendered map to a standalone HTML file and open it.
"""

import webbrowser
from pathlib import Path
from typing import Optional

import plotly.graph_objects as go

from world_timezones.visualization import MAP_CONFIG, MAP_TITLE

PAGE_HEAD = (
    "<head><title>{title}</title>"
    "<style>html, body {{ margin: 0; background: #000; }}</style>"
)


def build_map_page(fig: go.Figure, config: Optional[dict] = None) -> str:
    """
    Render a figure as a self-contained HTML page with a title.

    Args:
        fig: Figure to render
        config: Optional plotly config (defaults to MAP_CONFIG)

    Returns:
        Complete HTML document with plotly.js embedded
    """
    page = fig.to_html(
        config=config if config is not None else MAP_CONFIG,
        include_plotlyjs=True,
        full_html=True,
        default_width='100%',
        default_height='100vh'
    )
    return page.replace('<head>', PAGE_HEAD.format(title=MAP_TITLE), 1)


def write_map_html(
    fig: go.Figure,
    output_file: str = 'index.html',
    config: Optional[dict] = None
) -> Path:
    """
    Write a figure to a self-contained HTML file, replacing any existing file.

    Args:
        fig: Figure to export
        output_file: Destination path
        config: Optional plotly config (defaults to MAP_CONFIG)

    Returns:
        Absolute path of the written file
    """
    path = Path(output_file).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        f.write(build_map_page(fig, config))

    return path


def open_in_browser(path: Path) -> bool:
    """Open an exported file in the default web browser."""
    return webbrowser.open(Path(path).resolve().as_uri())
