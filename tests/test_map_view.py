import folium
from folium.plugins import HeatMap

from violation_map.clustering import cluster_violations
from violation_map.config import CENTROIDS
from violation_map.map_view import (
    add_legend,
    build_base_map,
    centroid_icon_html,
    point_popup,
    render_groups,
)
from violation_map.models import ViolationPoint


def sample_result():
    points = [
        ViolationPoint(0, 73.82, 15.39, {"vehicleNumber": "GA-01", "violations": "Speeding"}),
        ViolationPoint(1, 73.81, 15.40, {"vehicleNumber": "GA-02", "violations": "Parking"}),
        ViolationPoint(2, 74.06, 15.00, {"vehicleNumber": "GA-03", "violations": "Signal"}),
    ]
    return cluster_violations(points, list(CENTROIDS))


def children_of_type(parent, kind):
    return [child for child in parent._children.values() if isinstance(child, kind)]


def test_point_popup_uses_passenger_fields():
    result = sample_result()
    first = next(iter(result.groups.values())).points[0]
    assert point_popup(first) == "Veículo: GA-01<br>Infração: Speeding"


def test_centroid_icon_shows_count_and_color():
    html = centroid_icon_html(7, "#fed330")
    assert ">7</div>" in html
    assert "background-color: #fed330" in html


def test_render_groups_one_layer_per_group():
    folium_map = build_base_map()
    result = sample_result()
    render_groups(folium_map, result)

    layers = children_of_type(folium_map, folium.FeatureGroup)
    assert len(layers) == len(result.groups) == 2

    vasco = layers[0]
    markers = children_of_type(vasco, folium.CircleMarker)
    assert len(markers) == 2
    centroid_markers = [
        m for m in children_of_type(vasco, folium.Marker)
        if not isinstance(m, folium.CircleMarker)
    ]
    assert len(centroid_markers) == 1
    assert not children_of_type(folium_map, HeatMap)


def test_render_groups_with_heatmap():
    folium_map = build_base_map()
    render_groups(folium_map, sample_result(), heatmap=True)
    (heatmap,) = children_of_type(folium_map, HeatMap)
    assert len(heatmap.data) == 3


def test_legend_in_rendered_html():
    folium_map = build_base_map()
    add_legend(folium_map)
    html = folium_map.get_root().render()
    assert "Regions" in html
    for color in ("#ff6b6b", "#4ecdc4", "#45aaf2", "#fed330"):
        assert color in html
    assert "North West" in html


def test_popups_escape_csv_fields():
    point = ViolationPoint(0, 73.82, 15.39, {"vehicleNumber": "<b>GA</b>", "violations": "a & b"})
    (group,) = cluster_violations([point], list(CENTROIDS)).groups.values()
    assert point_popup(group.points[0]) == "Veículo: &lt;b&gt;GA&lt;/b&gt;<br>Infração: a &amp; b"
