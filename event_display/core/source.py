"""
Simulation input adapter.

:class:`EventViewer` inspects the simulation output once, picks the track
assembly routine matching its layout and then adds events to a scene.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterator, List, Optional, Union

from .. import config
from .assembly import assemble_event_tracks, assemble_step_tracks
from .attributes import TrackClassifier
from .constants import DEBUG
from .data_classes import EventRecord, Polyline
from .errors import UnsupportedSchemaError
from .selection import event_range
from .storage import open_storage


class SchemaKind(Enum):
    """Layout of the simulation output, named after the table it uses."""

    EMBEDDED_TRACKS = config.EVENTS_TABLE
    STEP_TABLE = config.STEPS_TABLE


def detect_schema(storage) -> SchemaKind:
    """Return the layout of ``storage``; "events" wins over "steps".

    Raises
    ------
    UnsupportedSchemaError
        If neither table is present.
    """
    for kind in (SchemaKind.EMBEDDED_TRACKS, SchemaKind.STEP_TABLE):
        if storage.has_table(kind.value):
            return kind
    raise UnsupportedSchemaError(
        f"Simulation output has neither an '{config.EVENTS_TABLE}' "
        f"nor a '{config.STEPS_TABLE}' table"
    )


def iter_selected_events(storage, event_id: int) -> Iterator[EventRecord]:
    """Embedded event records selected by ``event_id`` (negative: all)."""
    n_events = storage.n_entries(config.EVENTS_TABLE)
    for index in event_range(n_events, event_id):
        yield storage.read_event(index)


class EventViewer:
    """Adds Monte Carlo truth tracks of a simulation file to a scene.

    Parameters
    ----------
    source : str, Path or storage object
        Simulation file path (``.root`` or ``.csv``), or an opened storage
        such as :class:`~event_display.core.storage.MemoryStorage`.
    show_step_points : bool
        Draw a marker at every step point of styled tracks.
    max_tracks : int, optional
        Maximum number of tracks added per :meth:`add_event` call.
    position_scale : float
        Factor applied to every track position.
    progress : bool
        Show a progress bar while scanning step tables.

    Example
    -------
    >>> viewer = EventViewer("run.root", show_step_points=True)
    >>> viewer.add_event(0, scene)
    """

    def __init__(
        self,
        source: Union[str, Path, object],
        show_step_points: bool = False,
        max_tracks: Optional[int] = config.DEFAULT_MAX_TRACKS,
        position_scale: float = config.POSITION_SCALE,
        min_points: int = config.MIN_TRACK_POINTS,
        progress: bool = False,
    ):
        if isinstance(source, (str, Path)):
            self.storage = open_storage(source)
            print(f"[info] Simulation input: {source}")
        else:
            self.storage = source

        self.schema = detect_schema(self.storage)
        self.classifier = TrackClassifier(show_points=show_step_points)
        self.max_tracks = max_tracks
        self.position_scale = position_scale
        self.min_points = min_points
        self.progress = progress
        if DEBUG:
            print(f"[info] Simulation layout: '{self.schema.value}' table")

    def show_step_points(self, value: bool) -> None:
        """Show or hide step points along styled tracks."""
        self.classifier.show_points = value

    def iter_event(self, event_id: int) -> Iterator[Polyline]:
        """Yield the polylines of ``event_id`` (negative: every event)."""
        if self.schema is SchemaKind.EMBEDDED_TRACKS:
            return assemble_event_tracks(
                iter_selected_events(self.storage, event_id),
                classifier=self.classifier,
                max_tracks=self.max_tracks,
                min_points=self.min_points,
                position_scale=self.position_scale,
            )
        return assemble_step_tracks(
            self.storage.read_steps(),
            event_id,
            classifier=self.classifier,
            max_tracks=self.max_tracks,
            min_points=self.min_points,
            position_scale=self.position_scale,
            progress=self.progress,
        )

    def add_event(self, event_id: int, scene) -> int:
        """Add every track of ``event_id`` to ``scene``.

        Tracks are only handed to the scene once the whole selection has
        been assembled, so a failing call leaves the scene unchanged.

        Returns
        -------
        int
            Number of polylines added.
        """
        lines: List[Polyline] = list(self.iter_event(event_id))
        for line in lines:
            scene.add_element(line)

        which = "all events" if event_id < 0 else f"event {event_id}"
        print(f"[info] Added {len(lines)} tracks from {which}")
        return len(lines)

    def close(self) -> None:
        self.storage.close()
