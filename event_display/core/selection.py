"""
Event selection over simulation tables.

Event ids below zero select every event. Step tables are not stored in
event/track order, so they are first ordered with :func:`sort_index`, a
pure permutation that leaves the table untouched.
"""

from __future__ import annotations

from typing import Mapping, Sequence

import numpy as np

from .constants import STEP_SORT_KEYS
from .errors import EventNotFoundError, OutOfRangeError


def selects_all(event_id: int) -> bool:
    """Whether ``event_id`` is the "all events" selector."""
    return event_id < 0


def event_range(n_events: int, event_id: int) -> range:
    """Return the entry range of an embedded-track table to process.

    Parameters
    ----------
    n_events : int
        Number of event entries in the table.
    event_id : int
        Entry to draw, or a negative value for all entries.

    Raises
    ------
    OutOfRangeError
        If ``event_id >= n_events``.
    """
    if selects_all(event_id):
        return range(0, n_events)
    if event_id >= n_events:
        raise OutOfRangeError(
            f"Event {event_id} requested but only {n_events} events are available"
        )
    return range(event_id, event_id + 1)


def sort_index(
    columns: Mapping[str, np.ndarray],
    keys: Sequence[str] = STEP_SORT_KEYS,
) -> np.ndarray:
    """Return the stable permutation that orders rows by ``keys``.

    The first key is the major key. Rows with equal keys keep their
    original relative order.

    Example
    -------
    >>> cols = {"a": np.array([1, 0, 1]), "b": np.array([0, 5, -1])}
    >>> sort_index(cols, ("a", "b")).tolist()
    [1, 2, 0]
    """
    if not keys:
        raise ValueError("At least one sort key is required")
    # lexsort treats the last key as the primary one
    return np.lexsort(tuple(np.asarray(columns[k]) for k in reversed(keys)))


def select_steps(columns: Mapping[str, np.ndarray], event_id: int) -> np.ndarray:
    """Sorted row indices of the step table rows belonging to ``event_id``.

    For a negative ``event_id`` every row is returned in
    (event, track, step) order.

    Raises
    ------
    OutOfRangeError
        If ``event_id`` is larger than every event id in the table.
    EventNotFoundError
        If no row carries ``event_id`` but larger event ids exist.
    """
    order = sort_index(columns)
    if selects_all(event_id):
        return order

    sorted_events = np.asarray(columns["event_id"])[order]
    first = int(np.searchsorted(sorted_events, event_id, side="left"))
    last = int(np.searchsorted(sorted_events, event_id, side="right"))
    if first < last:
        return order[first:last]

    if last == len(sorted_events):
        raise OutOfRangeError(
            f"Event {event_id} requested but the step table has no event past "
            f"{sorted_events[-1] if len(sorted_events) else 'none'}"
        )
    raise EventNotFoundError(f"Event {event_id} not found in the step table")
