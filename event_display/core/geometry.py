"""
GDML geometry loading.

The file is parsed with pyg4ometry; the registry's world volume and its
physical volume tree are then converted into :class:`Volume` nodes that
the scene can walk. Box, tube, sphere and orb solids keep their
dimensions for analytic wireframes, every other solid is drawn from its
tessellated mesh. Lengths are converted to cm.
"""

from __future__ import annotations

import os
from typing import Iterator, List, Optional, Tuple

import numpy as np
import pyg4ometry.gdml as gdml

from .. import config
from .constants import DEBUG, LENGTH_UNITS_CM
from .data_classes import Solid, Volume

MM_TO_CM = LENGTH_UNITS_CM["mm"]

# pyg4ometry solid type -> (kind, {param: (attribute, divisor)})
_ANALYTIC_SOLIDS = {
    "Box": ("box", {"dx": ("pX", 2.0), "dy": ("pY", 2.0), "dz": ("pZ", 2.0)}),
    "Tubs": ("tube", {"rmin": ("pRMin", 1.0), "rmax": ("pRMax", 1.0), "dz": ("pDz", 2.0)}),
    "Sphere": ("sphere", {"rmin": ("pRmin", 1.0), "rmax": ("pRmax", 1.0)}),
    "Orb": ("sphere", {"rmax": ("pRMax", 1.0)}),
}


def rotation_matrix(angles: np.ndarray) -> np.ndarray:
    """Matrix of successive rotations about x, y then z (radians)."""
    ax, ay, az = angles
    cx, sx = np.cos(ax), np.sin(ax)
    cy, sy = np.cos(ay), np.sin(ay)
    cz, sz = np.cos(az), np.sin(az)
    rx = np.array([[1, 0, 0], [0, cx, -sx], [0, sx, cx]])
    ry = np.array([[cy, 0, sy], [0, 1, 0], [-sy, 0, cy]])
    rz = np.array([[cz, -sz, 0], [sz, cz, 0], [0, 0, 1]])
    return rz @ ry @ rx


def convert_solid(g4solid) -> Optional[Solid]:
    """Convert a pyg4ometry solid into a :class:`Solid` with lengths in cm."""
    if g4solid is None:
        return None

    kind, attributes = _ANALYTIC_SOLIDS.get(g4solid.type, ("mesh", {}))
    scale = LENGTH_UNITS_CM[getattr(g4solid, "lunit", "mm") or "mm"]
    params = {
        name: g4solid.evaluateParameter(getattr(g4solid, attr)) * scale / divisor
        for name, (attr, divisor) in attributes.items()
    }
    if kind == "sphere":
        params.setdefault("rmin", 0.0)
    return Solid(g4solid.name, kind, params, source=g4solid)


def mesh_edges(solid: Solid) -> List[np.ndarray]:
    """Closed polygon outlines of a solid's tessellation, in local cm.

    The mesh is computed on first use and cached on the solid.
    """
    if solid.edges is None:
        vertices, polygons, _ = solid.source.mesh().toVerticesAndPolygons()
        vertices = np.asarray(vertices, dtype=float) * MM_TO_CM
        edges = []
        for polygon in polygons:
            idx = list(polygon) + [polygon[0]]
            edges.append(vertices[idx])
        solid.edges = edges
    return solid.edges


def _placement(physvol) -> Tuple[np.ndarray, np.ndarray]:
    position = np.asarray(physvol.position.eval(), dtype=float) * MM_TO_CM
    angles = np.asarray(physvol.rotation.eval(), dtype=float)
    # GDML rotations rotate the frame, not the daughter
    return position, rotation_matrix(angles).T


def _build(logical, node_name: str, position: np.ndarray, rotation: np.ndarray) -> Volume:
    node = Volume(
        name=node_name,
        volume_name=logical.name,
        solid=convert_solid(getattr(logical, "solid", None)),
        position=position,
        rotation=rotation,
    )
    for physvol in logical.daughterVolumes:
        if physvol.type != "placement":
            if DEBUG:
                print(f"[warning] Skipping {physvol.type} volume {physvol.name}")
            continue
        pos, rot = _placement(physvol)
        node.children.append(_build(physvol.logicalVolume, physvol.name, pos, rot))
    return node


def load_gdml(file_path: str) -> Volume:
    """Load the volume hierarchy of a GDML file.

    Parameters
    ----------
    file_path : str
        Path to the GDML file on disk.

    Returns
    -------
    Volume
        Top (world) node. Daughters are placed relative to their mother.
    """
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"GDML file '{file_path}' does not exist")

    registry = gdml.Reader(file_path).getRegistry()
    world = registry.getWorldVolume()
    if world is None:
        raise ValueError(f"No world volume was found in '{file_path}' - the file may be corrupt")

    top = _build(world, world.name, np.zeros(3), np.eye(3))
    print(f"[info] Geometry input: {file_path}")
    return top


def find_node(volume: Volume, name: str) -> Optional[Volume]:
    """Return the daughter of ``volume`` named ``name`` (node or volume name)."""
    for child in volume.children:
        if name in (child.name, child.volume_name):
            return child
    return None


def hide_volume(volume: Volume) -> None:
    """Make a volume and all of its daughters invisible."""
    volume.visible = False
    volume.show_daughters = False


def iter_placed(
    volume: Volume,
    vis_level: int = config.DEFAULT_VIS_LEVEL,
    position: Optional[np.ndarray] = None,
    rotation: Optional[np.ndarray] = None,
    depth: int = 0,
) -> Iterator[Tuple[Volume, np.ndarray, np.ndarray, int]]:
    """Walk visible volumes down to ``vis_level`` levels below ``volume``.

    Yields
    ------
    (volume, global_position, global_rotation, depth)
    """
    if position is None:
        position = np.zeros(3)
    if rotation is None:
        rotation = np.eye(3)

    if volume.visible:
        yield volume, position, rotation, depth
    if depth >= vis_level or not volume.show_daughters:
        return
    for child in volume.children:
        yield from iter_placed(
            child,
            vis_level,
            position + rotation @ child.position,
            rotation @ child.rotation,
            depth + 1,
        )


def volume_depth(volume: Volume) -> int:
    """Number of levels below ``volume``."""
    if not volume.children:
        return 0
    return 1 + max(volume_depth(child) for child in volume.children)
