"""
Scene holding everything drawn by the viewer.

Geometry is added once as global elements; tracks are added per event.
The scene draws itself either on a 3D axis or on a 2D axis for an
orthogonal projection.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

import numpy as np

from .. import config
from ..core.data_classes import Polyline, Solid, Volume
from ..core.geometry import iter_placed, mesh_edges

# Axis index pairs of the orthogonal projections (horizontal, vertical)
PROJECTIONS = {
    "XY": (0, 1),
    "ZY": (2, 1),
    "XZ": (0, 2),
}
AXIS_LABELS = ("x (cm)", "y (cm)", "z (cm)")


def _circle(radius: float, z: float, n: int = config.CIRCLE_SEGMENTS) -> np.ndarray:
    theta = np.linspace(0.0, 2.0 * np.pi, n + 1)
    return np.column_stack([radius * np.cos(theta), radius * np.sin(theta), np.full_like(theta, z)])


def solid_wireframe(solid: Optional[Solid]) -> List[np.ndarray]:
    """Wireframe of a solid as a list of (n, 3) point chains in local coordinates."""
    if solid is None:
        return []
    p = solid.params

    if solid.kind == "box":
        dx, dy, dz = p["dx"], p["dy"], p["dz"]
        square = np.array([[-dx, -dy], [dx, -dy], [dx, dy], [-dx, dy], [-dx, -dy]])
        bottom = np.column_stack([square, np.full(5, -dz)])
        top = np.column_stack([square, np.full(5, dz)])
        edges = [bottom, top]
        for x, y in square[:4]:
            edges.append(np.array([[x, y, -dz], [x, y, dz]]))
        return edges

    if solid.kind == "tube":
        rmax, rmin, dz = p["rmax"], p["rmin"], p["dz"]
        edges = [_circle(rmax, -dz), _circle(rmax, dz)]
        if rmin > 0:
            edges += [_circle(rmin, -dz), _circle(rmin, dz)]
        for angle in (0.0, 0.5 * np.pi, np.pi, 1.5 * np.pi):
            x, y = rmax * np.cos(angle), rmax * np.sin(angle)
            edges.append(np.array([[x, y, -dz], [x, y, dz]]))
        return edges

    if solid.kind == "sphere":
        ring = _circle(p["rmax"], 0.0)
        return [ring, ring[:, [0, 2, 1]], ring[:, [2, 0, 1]]]

    if solid.kind == "mesh" and solid.source is not None:
        return mesh_edges(solid)

    return []


class Scene:
    """Collection of geometry volumes and track polylines."""

    def __init__(self):
        self.elements: List[Polyline] = []
        self.global_elements: List[Tuple[Volume, int]] = []

    def add_element(self, polyline: Polyline) -> None:
        """Add a finished track. The scene takes ownership."""
        self.elements.append(polyline)

    def add_global_element(self, volume: Volume, vis_level: int = config.DEFAULT_VIS_LEVEL) -> None:
        """Add a volume tree drawn down to ``vis_level`` levels."""
        self.global_elements.append((volume, vis_level))

    def clear_event(self) -> None:
        self.elements.clear()

    def geometry_wireframes(self) -> List[np.ndarray]:
        """All visible volume edges in global coordinates."""
        chains = []
        for top, vis_level in self.global_elements:
            for volume, position, rotation, _ in iter_placed(top, vis_level):
                for chain in solid_wireframe(volume.solid):
                    chains.append(position + chain @ rotation.T)
        return chains

    def bounds(self) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        """Lower and upper corner of everything in the scene, or None if empty."""
        pts = [line.points for line in self.elements] + self.geometry_wireframes()
        pts = [p for p in pts if len(p)]
        if not pts:
            return None
        stacked = np.concatenate(pts, axis=0)
        return stacked.min(axis=0), stacked.max(axis=0)

    def draw(self, ax, projection: Optional[str] = None) -> None:
        """Draw the scene on ``ax``.

        Parameters
        ----------
        ax : matplotlib axis
            A 3D axis when ``projection`` is None, a 2D axis otherwise.
        projection : {'XY', 'ZY', 'XZ'}, optional
            Orthogonal projection to draw.
        """
        if projection is None:
            def plot(points, **kwargs):
                return ax.plot(points[:, 0], points[:, 1], points[:, 2], **kwargs)
        else:
            i, j = PROJECTIONS[projection]

            def plot(points, **kwargs):
                return ax.plot(points[:, i], points[:, j], **kwargs)

        for chain in self.geometry_wireframes():
            plot(chain, color=config.VOLUME_COLOR, alpha=config.VOLUME_ALPHA,
                 linewidth=config.VOLUME_LINE_WIDTH)

        for line in self.elements:
            style = line.style
            kwargs = dict(color=style.color, linewidth=config.TRACK_LINE_WIDTH,
                          alpha=config.TRACK_ALPHA)
            if style.show_points:
                kwargs.update(marker='.', markersize=config.STEP_MARKER_SIZE,
                              markerfacecolor=style.marker_color)
            plot(line.points, **kwargs)
