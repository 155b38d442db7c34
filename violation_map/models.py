"""Entidades centrais do agrupamento de infrações."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional

from .errors import UnassignablePoint


class Quadrant(str, Enum):
    NORTH_WEST = "North West"
    NORTH_EAST = "North East"
    SOUTH_WEST = "South West"
    SOUTH_EAST = "South East"


@dataclass(frozen=True)
class Centroid:
    name: str
    longitude: float
    latitude: float


@dataclass(frozen=True)
class QuadrantCenter:
    longitude: float = 73.99
    latitude: float = 15.35


@dataclass(frozen=True)
class ViolationPoint:
    index: int
    longitude: float
    latitude: float
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AssignedPoint:
    point: ViolationPoint
    centroid: Optional[Centroid]
    centroid_index: Optional[int]
    distance: float

    @property
    def is_assigned(self) -> bool:
        return self.centroid is not None

    @property
    def longitude(self) -> float:
        return self.point.longitude

    @property
    def latitude(self) -> float:
        return self.point.latitude


@dataclass
class ClusterGroup:
    centroid: Centroid
    quadrant: Quadrant
    points: List[AssignedPoint]

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class GroupingResult:
    """Grupos por centróide (ordem de primeira aparição) e pontos excluídos."""

    groups: Dict[int, ClusterGroup]
    excluded: List[UnassignablePoint] = field(default_factory=list)

    @property
    def assigned_count(self) -> int:
        return sum(len(group) for group in self.groups.values())

    def by_name(self) -> Dict[str, ClusterGroup]:
        return {group.centroid.name: group for group in self.groups.values()}
