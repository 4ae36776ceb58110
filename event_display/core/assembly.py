"""
Track assembly: turn simulation records into one polyline per track.

Two record layouts are supported:

- flat step tables (one row per step, rows in arbitrary order), handled by
  :func:`assemble_step_tracks`;
- embedded event records (tracks carry their ordered steps), handled by
  :func:`assemble_event_tracks`.

Both yield :class:`Polyline` objects one at a time; the caller owns them.
"""

from __future__ import annotations

from typing import Callable, Iterable, Iterator, List, Mapping, Optional, Union

import numpy as np
from tqdm import tqdm

from .. import config
from .attributes import TrackClassifier, particle_label
from .constants import DEBUG, NO_TRACK
from .data_classes import EventRecord, Polyline, Track, TrackStyle
from .errors import MalformedRecordError
from .selection import select_steps
from .storage import StepTable

Classifier = Callable[[int], TrackStyle]


def track_name(event_id: int, track_id: int, particle_code: int) -> str:
    """Polyline name, e.g. ``"0_12_e-"``."""
    return f"{event_id}_{track_id}_{particle_label(particle_code)}"


def _check_max_tracks(max_tracks: Optional[int]) -> None:
    if max_tracks is not None and max_tracks <= 0:
        raise ValueError(f"max_tracks must be a positive integer or None, got {max_tracks}")


def _make_polyline(
    points: List[np.ndarray],
    event_id: int,
    track_id: int,
    particle_code: int,
    classifier: Classifier,
    position_scale: float,
) -> Polyline:
    coords = np.asarray(points, dtype=float).reshape(-1, 3) * position_scale
    return Polyline(
        name=track_name(event_id, track_id, particle_code),
        style=classifier(particle_code),
        points=coords,
        event_id=event_id,
        track_id=track_id,
        particle_code=particle_code,
    )


def _check_strict_order(columns: Mapping[str, np.ndarray], order: np.ndarray) -> None:
    """Raise if two rows share the same (event, track, step) triple."""
    if len(order) < 2:
        return
    keys = np.column_stack([
        np.asarray(columns["event_id"])[order],
        np.asarray(columns["track_id"])[order],
        np.asarray(columns["step_index"])[order],
    ])
    duplicated = np.all(keys[1:] == keys[:-1], axis=1)
    if np.any(duplicated):
        row = keys[int(np.argmax(duplicated))]
        raise MalformedRecordError(
            f"Duplicate step {row[2]} for track {row[1]} of event {row[0]}; "
            "steps cannot be ordered"
        )


def assemble_step_tracks(
    table: Union[StepTable, Mapping[str, np.ndarray]],
    event_id: int = -1,
    classifier: Optional[Classifier] = None,
    max_tracks: Optional[int] = config.DEFAULT_MAX_TRACKS,
    min_points: int = config.MIN_TRACK_POINTS,
    position_scale: float = config.POSITION_SCALE,
    progress: bool = False,
) -> Iterator[Polyline]:
    """Assemble polylines from a flat step table.

    Rows are visited in (event, track, step) order. The first row of a
    track contributes its pre-step position (the vertex); each following
    row contributes its post-step position. A track is finished when the
    (event, track) pair changes or the selection is exhausted, and is
    styled after the particle code of its first row.

    Parameters
    ----------
    table : StepTable or mapping of columns
        Step records.
    event_id : int
        Event to assemble; negative assembles all events. Tracks of
        different events never merge, even with equal track ids.
    classifier : callable, optional
        Particle code to :class:`TrackStyle`; defaults to
        :class:`TrackClassifier`.
    max_tracks : int, optional
        Stop after this many polylines have been yielded.
    min_points : int
        Tracks with fewer points are dropped.
    position_scale : float
        Factor applied to every position.
    progress : bool
        Show a progress bar over the scanned rows.

    Yields
    ------
    Polyline

    Raises
    ------
    OutOfRangeError, EventNotFoundError
        If ``event_id`` selects nothing.
    MalformedRecordError
        If a track has two rows with the same step index.
    """
    _check_max_tracks(max_tracks)
    if classifier is None:
        classifier = TrackClassifier()
    columns = table.columns if isinstance(table, StepTable) else table

    order = select_steps(columns, event_id)
    _check_strict_order(columns, order)

    events = np.asarray(columns["event_id"])
    tracks = np.asarray(columns["track_id"])
    codes = np.asarray(columns["particle_code"])
    pre = np.asarray(columns["pre_position"])
    post = np.asarray(columns["post_position"])

    current_key = NO_TRACK
    current_code = 0
    points: List[np.ndarray] = []
    n_emitted = 0

    rows = tqdm(order, desc="Reading steps", unit="step", disable=not progress)
    try:
        for i in rows:
            key = (int(events[i]), int(tracks[i]))
            if key != current_key:
                if current_key is not NO_TRACK and len(points) >= min_points:
                    yield _make_polyline(points, *current_key, current_code, classifier, position_scale)
                    n_emitted += 1
                    if max_tracks is not None and n_emitted >= max_tracks:
                        if DEBUG:
                            print(f"[info] Track limit of {max_tracks} reached")
                        return
                current_key = key
                current_code = int(codes[i])
                points = [pre[i]]
            else:
                points.append(post[i])

        if current_key is not NO_TRACK and len(points) >= min_points:
            yield _make_polyline(points, *current_key, current_code, classifier, position_scale)
    finally:
        rows.close()


def build_track_polyline(
    track: Track,
    event_id: int,
    classifier: Optional[Classifier] = None,
    position_scale: float = config.POSITION_SCALE,
) -> Polyline:
    """Polyline of an embedded track: vertex followed by every step position."""
    if classifier is None:
        classifier = TrackClassifier()
    points = [track.vertex_position] + [step.position for step in track.steps]
    return _make_polyline(
        points, event_id, track.track_id, track.particle_code, classifier, position_scale
    )


def assemble_event_tracks(
    events: Iterable[EventRecord],
    classifier: Optional[Classifier] = None,
    max_tracks: Optional[int] = config.DEFAULT_MAX_TRACKS,
    min_points: int = config.MIN_TRACK_POINTS,
    position_scale: float = config.POSITION_SCALE,
) -> Iterator[Polyline]:
    """Assemble polylines from already selected embedded event records.

    For each event, primary tracks are yielded before secondary tracks,
    each in stored order.
    """
    _check_max_tracks(max_tracks)
    if classifier is None:
        classifier = TrackClassifier()

    n_emitted = 0
    for event in events:
        for track in event.tracks:
            line = build_track_polyline(track, event.event_id, classifier, position_scale)
            if len(line) < min_points:
                continue
            yield line
            n_emitted += 1
            if max_tracks is not None and n_emitted >= max_tracks:
                return
