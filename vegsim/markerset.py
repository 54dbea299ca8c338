"""Space-colonisation markers that buds claim inside their perception cones."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from vegsim import rng
from vegsim.boundingvolume import BoundingVolume, GridIndex
from vegsim.vector import Vec3

F32_MAX = 3.4028234663852886e38
"""Distance of an unclaimed marker: the largest single-precision float."""

OCCUPIED_ID = 0
"""Bud id given to markers that lie in space already taken by the plant."""


@dataclass(slots=True)
class Marker:
    """A point in space that at most one bud can claim."""

    position: Vec3
    claimed_bud: int | None = None
    distance_to_claimed: float = F32_MAX

    def reset(self) -> None:
        """Release the marker."""
        self.claimed_bud = None
        self.distance_to_claimed = F32_MAX

    def claim(self, bud_id: int, dist: float) -> None:
        """Give the marker to ``bud_id`` at distance ``dist``."""
        self.claimed_bud = bud_id
        self.distance_to_claimed = dist


def grid_step(volume: BoundingVolume, resolution: GridIndex) -> Vec3:
    """Size of one grid cell of ``volume`` divided at ``resolution``."""
    return volume.interpolate((1, 1, 1), resolution) - volume.interpolate((0, 0, 0), resolution)


def sphere_grid_points(
    volume: BoundingVolume, resolution: GridIndex, point: Vec3, r: float
) -> Iterator[Vec3]:
    """Yield grid-spaced sample points within ``r`` of ``point``.

    The walk starts at the lower corner of the sphere's bounding cube and
    advances by one cell size per axis.
    """
    step = grid_step(volume, resolution)
    if min(step) <= 0.0:
        raise ValueError("grid cells must have a positive size")
    low = point - Vec3(r, r, r)
    high = point + Vec3(r, r, r)
    px = low.x
    while px < high.x:
        py = low.y
        while py < high.y:
            pz = low.z
            while pz < high.z:
                p = Vec3(px, py, pz)
                if not (p - point).length() > r:
                    yield p
                pz += step.z
            py += step.y
        px += step.x


class MarkerSet:
    """One randomly jittered marker per grid cell of a bounding volume."""

    def __init__(self, bounding_volume: BoundingVolume, resolution: GridIndex) -> None:
        self.bounding_volume = bounding_volume
        self.resolution: GridIndex = tuple(resolution)  # type: ignore[assignment]
        rx, ry, rz = self.resolution
        step = grid_step(bounding_volume, self.resolution)
        self.markers: list[Marker] = []
        for y in range(ry):
            for z in range(rz):
                for x in range(rx):
                    base = bounding_volume.interpolate((x, y, z), self.resolution)
                    offset = Vec3(step.x * rng.rand(), step.y * rng.rand(), step.z * rng.rand())
                    self.markers.append(Marker(base + offset))

    def __repr__(self) -> str:
        return (
            f"MarkerSet(bounding_volume={self.bounding_volume!r}, "
            f"resolution={self.resolution!r})"
        )

    def all_marked_points(self) -> list[Marker]:
        """Markers claimed by a bud, excluding occupied space."""
        return [
            marker
            for marker in self.markers
            if marker.claimed_bud is not None and marker.claimed_bud != OCCUPIED_ID
        ]

    def reset(self) -> None:
        """Release every marker."""
        for marker in self.markers:
            marker.reset()

    def set_markers_in_cone(
        self, bud_id: int, point: Vec3, direction: Vec3, theta: float, r: float
    ) -> int:
        """Claim cone markers closer to ``point`` than their current owner; return the count."""
        total_marked = 0
        for marker in self._markers_in_cone(point, direction, theta, r):
            dist = (marker.position - point).length()
            if marker.distance_to_claimed > dist:
                marker.claim(bud_id, dist)
                total_marked += 1
        return total_marked

    def remove_markers_in_sphere(self, point: Vec3, r: float) -> None:
        """Mark every marker within ``r`` of ``point`` as occupied."""
        for marker in self._markers_in_sphere(point, r):
            marker.claim(OCCUPIED_ID, 0.0)

    def total_markers_for_id_in_cone(
        self, bud_id: int, point: Vec3, direction: Vec3, theta: float, r: float
    ) -> int:
        """Count cone markers owned by ``bud_id``."""
        return sum(
            1
            for marker in self._markers_in_cone(point, direction, theta, r)
            if marker.claimed_bud == bud_id
        )

    def markers_dir_for_id_in_cone(
        self, bud_id: int, point: Vec3, direction: Vec3, theta: float, r: float
    ) -> Vec3 | None:
        """Normalised sum of directions to the cone markers owned by ``bud_id``.

        None if the cone holds no markers at all.
        """
        markers = self._markers_in_cone(point, direction, theta, r)
        if not markers:
            return None
        marker_dir = Vec3()
        for marker in markers:
            if marker.claimed_bud == bud_id:
                marker_dir = marker_dir + (marker.position - point).norm()
        return marker_dir.norm()

    def _index(self, cell: GridIndex) -> int | None:
        x, y, z = cell
        rx, ry, rz = self.resolution
        if not (0 <= x < rx and 0 <= y < ry and 0 <= z < rz):
            return None
        return y * rx * rz + z * rx + x

    def _markers_in_sphere(self, point: Vec3, r: float) -> list[Marker]:
        found = []
        for p in sphere_grid_points(self.bounding_volume, self.resolution, point, r):
            cell = self.bounding_volume.reverse_interpolate(p, self.resolution, False)
            index = self._index(cell)
            if index is not None:
                found.append(self.markers[index])
        return found

    def _markers_in_cone(
        self, point: Vec3, direction: Vec3, theta: float, r: float
    ) -> list[Marker]:
        return [
            marker
            for marker in self._markers_in_sphere(point, r)
            if not (marker.position - point).angle_between(direction) > theta
        ]