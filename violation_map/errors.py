"""Erros do agrupamento por centróide."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import ViolationPoint


class ClusteringError(Exception):
    pass


class InvalidConfiguration(ClusteringError):
    """Conjunto de centróides vazio ou inválido; nada pode ser agrupado."""


class UnassignablePoint(ClusteringError):
    """Ponto sem distância mínima válida (coordenadas não numéricas)."""

    def __init__(self, point: "ViolationPoint") -> None:
        self.point = point
        super().__init__(
            f"Ponto {point.index} sem centróide "
            f"(longitude={point.longitude!r}, latitude={point.latitude!r})"
        )


class MissingCentroidForGroup(ClusteringError):
    """Grupo apontando para um centróide fora do conjunto configurado."""
