"""Atribuição de infrações ao centróide mais próximo e classificação em quadrantes."""

import math
from typing import Dict, List, Sequence

import numpy as np
from scipy.spatial.distance import cdist

from .config import QUADRANT_CENTER
from .errors import InvalidConfiguration, MissingCentroidForGroup, UnassignablePoint
from .models import (
    AssignedPoint,
    Centroid,
    ClusterGroup,
    GroupingResult,
    Quadrant,
    QuadrantCenter,
    ViolationPoint,
)

QUADRANT_BASES = ("first_point", "centroid")


def assign_to_centroids(
    points: Sequence[ViolationPoint], centroids: Sequence[Centroid]
) -> List[AssignedPoint]:
    """Associa cada ponto ao centróide mais próximo (distância euclidiana em graus).

    Empates ficam com o primeiro centróide da lista. Pontos sem nenhuma
    distância finita saem sem centróide.
    """

    if not centroids:
        raise InvalidConfiguration("Lista de centróides vazia")
    if not points:
        return []

    coords = np.array([(p.longitude, p.latitude) for p in points], dtype=float)
    centers = np.array([(c.longitude, c.latitude) for c in centroids], dtype=float)
    distances = cdist(coords, centers)

    # NaN nunca é menor que o mínimo corrente, então conta como infinito
    comparable = np.where(np.isfinite(distances), distances, np.inf)
    nearest = np.argmin(comparable, axis=1)

    assigned: List[AssignedPoint] = []
    for point, idx, row in zip(points, nearest, comparable):
        best = float(row[idx])
        if np.isfinite(best):
            assigned.append(AssignedPoint(point, centroids[idx], int(idx), best))
        else:
            assigned.append(AssignedPoint(point, None, None, math.inf))
    return assigned


def classify_quadrant(
    longitude: float, latitude: float, center: QuadrantCenter = QUADRANT_CENTER
) -> Quadrant:
    if longitude < center.longitude and latitude > center.latitude:
        return Quadrant.NORTH_WEST
    if longitude >= center.longitude and latitude > center.latitude:
        return Quadrant.NORTH_EAST
    if longitude < center.longitude and latitude <= center.latitude:
        return Quadrant.SOUTH_WEST
    return Quadrant.SOUTH_EAST


def group_by_centroid(
    assigned: Sequence[AssignedPoint],
    centroids: Sequence[Centroid],
    *,
    center: QuadrantCenter = QUADRANT_CENTER,
    quadrant_basis: str = "first_point",
) -> GroupingResult:
    """Agrupa pontos por centróide e rotula cada grupo com um quadrante.

    Com ``quadrant_basis="first_point"`` o quadrante vem do primeiro ponto do
    grupo, então depende da ordem de entrada. ``"centroid"`` usa as
    coordenadas do próprio centróide.
    """

    if quadrant_basis not in QUADRANT_BASES:
        raise ValueError(f"quadrant_basis inválido: {quadrant_basis}")

    members: Dict[int, List[AssignedPoint]] = {}
    excluded: List[UnassignablePoint] = []
    for item in assigned:
        if not item.is_assigned:
            excluded.append(UnassignablePoint(item.point))
            continue
        idx = item.centroid_index
        if idx is None or not 0 <= idx < len(centroids) or centroids[idx] != item.centroid:
            raise MissingCentroidForGroup(
                f"Centróide {item.centroid.name!r} não pertence ao conjunto configurado"
            )
        members.setdefault(idx, []).append(item)

    groups: Dict[int, ClusterGroup] = {}
    for idx, group_points in members.items():
        centroid = centroids[idx]
        if quadrant_basis == "centroid":
            anchor_lon, anchor_lat = centroid.longitude, centroid.latitude
        else:
            anchor_lon, anchor_lat = group_points[0].longitude, group_points[0].latitude
        quadrant = classify_quadrant(anchor_lon, anchor_lat, center)
        groups[idx] = ClusterGroup(centroid=centroid, quadrant=quadrant, points=group_points)

    return GroupingResult(groups=groups, excluded=excluded)


def cluster_violations(
    points: Sequence[ViolationPoint],
    centroids: Sequence[Centroid],
    *,
    center: QuadrantCenter = QUADRANT_CENTER,
    quadrant_basis: str = "first_point",
    strict: bool = False,
) -> GroupingResult:
    """Atribui e agrupa; em modo estrito qualquer ponto excluído aborta o lote."""

    assigned = assign_to_centroids(points, centroids)
    result = group_by_centroid(
        assigned, centroids, center=center, quadrant_basis=quadrant_basis
    )
    if strict and result.excluded:
        raise result.excluded[0]
    return result
