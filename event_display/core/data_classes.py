"""
Data classes for the event display.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class StepRecord:
    """One row of a flat step table.

    Attributes
    ----------
    event_id : int
        Event the step belongs to.
    track_id : int
        Track id, unique within an event.
    step_index : int
        Step counter within the track, used as the minor sort key.
    particle_code : int
        Signed PDG code of the particle.
    pre_position : np.ndarray
        Position at the start of the step.
    post_position : np.ndarray
        Position at the end of the step.
    """

    event_id: int
    track_id: int
    step_index: int
    particle_code: int
    pre_position: np.ndarray
    post_position: np.ndarray


@dataclass
class Step:
    """Step of a track stored in an embedded event record."""

    position: np.ndarray
    kinetic_energy: Optional[float] = None  # MeV
    global_time: Optional[float] = None  # s


@dataclass
class Track:
    """Track of an embedded event record, steps already in order."""

    particle_code: int
    track_id: int
    parent_id: int
    vertex_position: np.ndarray
    steps: List[Step] = field(default_factory=list)


@dataclass
class EventRecord:
    """One simulated event with its primary and secondary tracks."""

    event_id: int
    primary_tracks: List[Track] = field(default_factory=list)
    secondary_tracks: List[Track] = field(default_factory=list)

    @property
    def tracks(self) -> List[Track]:
        """Primaries followed by secondaries."""
        return list(self.primary_tracks) + list(self.secondary_tracks)


@dataclass(frozen=True)
class TrackStyle:
    """How a track is drawn: a color family shared by a particle type."""

    color: str
    marker_color: str
    label: str
    show_points: bool = False


@dataclass
class Polyline:
    """Renderable trajectory of one track.

    Attributes
    ----------
    name : str
        ``"<event>_<track>_<particle>"``.
    style : TrackStyle
        Color classification of the particle.
    points : np.ndarray, shape (n, 3)
        Vertex followed by step points, in step order.
    event_id, track_id, particle_code : int
        Identity of the track the points come from.
    """

    name: str
    style: TrackStyle
    points: np.ndarray
    event_id: int
    track_id: int
    particle_code: int

    @property
    def key(self) -> Tuple[int, int]:
        return (self.event_id, self.track_id)

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class Solid:
    """GDML solid, dimensions in cm and radians.

    ``kind`` is "box", "tube" or "sphere" for solids drawn from their
    dimensions, or "mesh" for solids drawn from the tessellation of
    ``source`` (the pyg4ometry solid).
    """

    name: str
    kind: str
    params: Dict[str, float] = field(default_factory=dict)
    source: Any = field(default=None, repr=False)
    edges: Optional[List[np.ndarray]] = field(default=None, repr=False)


@dataclass
class Volume:
    """Node of the geometry hierarchy (a placed logical volume).

    ``position`` and ``rotation`` are relative to the mother volume.
    """

    name: str
    volume_name: str
    solid: Optional[Solid]
    position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    rotation: np.ndarray = field(default_factory=lambda: np.eye(3))
    children: List["Volume"] = field(default_factory=list)
    visible: bool = True
    show_daughters: bool = True
