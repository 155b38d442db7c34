"""Renderização dos grupos em mapa folium (marcadores, legenda e heatmap)."""

from html import escape
from typing import Mapping, Sequence, Tuple

import folium
from folium import Element
from folium.plugins import HeatMap

from .config import MAP_CENTER, MAP_ZOOM, REGION_COLORS
from .models import AssignedPoint, ClusterGroup, GroupingResult, Quadrant

TILES_URL = "https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
TILES_ATTRIBUTION = "&copy; OpenStreetMap contributors"

LEGEND_CSS = """
<style>
.legend { background: white; padding: 6px 10px; border-radius: 5px;
          box-shadow: 0 0 15px rgba(0, 0, 0, 0.2); line-height: 18px; }
.legend h4 { margin: 0 0 5px; }
.legend .color-box { display: inline-block; width: 18px; height: 18px;
                     margin-right: 8px; vertical-align: middle; opacity: 0.8; }
</style>
"""


def build_base_map(
    location: Tuple[float, float] = MAP_CENTER, zoom_start: int = MAP_ZOOM
) -> folium.Map:
    folium_map = folium.Map(location=list(location), zoom_start=zoom_start, tiles=None)
    folium.TileLayer(tiles=TILES_URL, attr=TILES_ATTRIBUTION, name="OpenStreetMap").add_to(
        folium_map
    )
    return folium_map


def point_popup(point: AssignedPoint) -> str:
    attributes = point.point.attributes
    return (
        f"Veículo: {escape(str(attributes.get('vehicleNumber', '-')))}<br>"
        f"Infração: {escape(str(attributes.get('violations', '-')))}"
    )


def centroid_icon_html(count: int, color: str) -> str:
    return (
        f'<div style="background-color: {color}; color: white; border-radius: 50%; '
        "width: 30px; height: 30px; display: flex; justify-content: center; "
        f'align-items: center; font-weight: bold;">{count}</div>'
    )


def plot_group(
    layer: folium.FeatureGroup, group: ClusterGroup, color: str
) -> None:
    for point in group.points:
        folium.CircleMarker(
            location=[point.latitude, point.longitude],
            radius=5,
            color="#000",
            weight=1,
            opacity=1,
            fill=True,
            fill_color=color,
            fill_opacity=0.8,
            popup=point_popup(point),
        ).add_to(layer)

    centroid = group.centroid
    folium.Marker(
        location=[centroid.latitude, centroid.longitude],
        icon=folium.DivIcon(
            class_name="cluster-icon", html=centroid_icon_html(len(group), color)
        ),
        popup=(
            f"<strong>{escape(centroid.name)}</strong><br>"
            f"Região: {group.quadrant.value}<br>"
            f"Infrações: {len(group)}"
        ),
    ).add_to(layer)


def add_legend(
    folium_map: folium.Map, colors: Mapping[Quadrant, str] = REGION_COLORS
) -> None:
    items = "".join(
        f'<div><span class="color-box" style="background-color: {color};"></span>'
        f"{quadrant.value}</div>"
        for quadrant, color in colors.items()
    )
    legend_html = f"""
    <div class="legend" style="position: fixed; bottom: 30px; right: 10px; z-index: 9999;">
        <h4>Regions</h4>
        {items}
    </div>
    """
    folium_map.get_root().header.add_child(Element(LEGEND_CSS))
    folium_map.get_root().html.add_child(Element(legend_html))


def add_heatmap(
    folium_map: folium.Map, points: Sequence[AssignedPoint], *, show: bool = True
) -> HeatMap:
    heatmap = HeatMap(
        [[p.latitude, p.longitude] for p in points],
        name="Densidade de infrações",
        radius=12,
        blur=15,
        min_opacity=0.4,
        show=show,
    )
    heatmap.add_to(folium_map)
    return heatmap


def render_groups(
    folium_map: folium.Map,
    result: GroupingResult,
    colors: Mapping[Quadrant, str] = REGION_COLORS,
    *,
    heatmap: bool = False,
) -> None:
    """Desenha um FeatureGroup por centróide, a legenda e, se pedido, o heatmap."""

    for group in result.groups.values():
        layer = folium.FeatureGroup(name=f"{escape(group.centroid.name)} ({len(group)})")
        plot_group(layer, group, colors[group.quadrant])
        layer.add_to(folium_map)

    if heatmap:
        all_points = [p for group in result.groups.values() for p in group.points]
        add_heatmap(folium_map, all_points)

    add_legend(folium_map, colors)
    folium.LayerControl(collapsed=False).add_to(folium_map)
