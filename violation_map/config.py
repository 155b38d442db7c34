"""Configuração fixa: centróides de Goa, ponto médio dos quadrantes e paleta."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

import numpy as np
import pandas as pd

from .errors import InvalidConfiguration
from .models import Centroid, Quadrant, QuadrantCenter

MAP_CENTER: Tuple[float, float] = (15.4, 73.8)
MAP_ZOOM = 10

QUADRANT_CENTER = QuadrantCenter(longitude=73.99, latitude=15.35)

CENTROIDS: Tuple[Centroid, ...] = (
    Centroid("Vasco da Gama", 73.8113, 15.3927),
    Centroid("Ponda", 73.9668, 15.4027),
    Centroid("Bicholim", 73.9087, 15.5857),
    Centroid("Curchorem", 74.1109, 15.2644),
    Centroid("Valpoi", 74.1367, 15.5321),
    Centroid("Canacona", 74.0593, 14.9959),
    Centroid("Pernem", 73.7951, 15.7217),
    Centroid("Sanguem", 74.1510, 15.2292),
    Centroid("Quepem", 74.0777, 15.2126),
    Centroid("Dharbandora", 74.2070, 15.4226),
)

REGION_COLORS: Dict[Quadrant, str] = {
    Quadrant.NORTH_WEST: "#ff6b6b",
    Quadrant.NORTH_EAST: "#4ecdc4",
    Quadrant.SOUTH_WEST: "#45aaf2",
    Quadrant.SOUTH_EAST: "#fed330",
}


def validate_centroids(centroids: Sequence[Centroid]) -> None:
    if not centroids:
        raise InvalidConfiguration("Nenhum centróide configurado")

    seen = set()
    for centroid in centroids:
        if not centroid.name.strip():
            raise InvalidConfiguration("Centróide sem nome")
        if centroid.name in seen:
            raise InvalidConfiguration(f"Centróide duplicado: {centroid.name}")
        seen.add(centroid.name)
        if not (math.isfinite(centroid.longitude) and math.isfinite(centroid.latitude)):
            raise InvalidConfiguration(
                f"Coordenadas inválidas para o centróide {centroid.name}"
            )


def load_centroids(path: Union[str, Path]) -> List[Centroid]:
    """Lê centróides de um CSV com colunas name, longitude, latitude."""

    frame = pd.read_csv(path, dtype={"name": str}, keep_default_na=False)
    missing = {"name", "longitude", "latitude"} - set(frame.columns)
    if missing:
        raise InvalidConfiguration(
            f"Colunas ausentes no arquivo de centróides: {', '.join(sorted(missing))}"
        )

    longitudes = pd.to_numeric(frame["longitude"], errors="coerce").to_numpy(
        dtype=float, na_value=np.nan
    )
    latitudes = pd.to_numeric(frame["latitude"], errors="coerce").to_numpy(
        dtype=float, na_value=np.nan
    )
    centroids = [
        Centroid(name=str(name).strip(), longitude=float(lon), latitude=float(lat))
        for name, lon, lat in zip(frame["name"], longitudes, latitudes)
    ]
    validate_centroids(centroids)
    return centroids
