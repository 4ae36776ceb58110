"""
Simulation output readers.

Every reader exposes the same small interface used by the track assembly
code:

- ``has_table(name)``: whether a table ("events" or "steps") exists
- ``n_entries(name)``: number of rows in a table
- ``read_steps()``: the whole flat step table as a :class:`StepTable`
- ``read_event(index)``: one embedded-track :class:`EventRecord`

ROOT files are read with uproot, CSV step tables with pandas.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd
import uproot

from .. import config
from .data_classes import EventRecord, Step, StepRecord, Track
from .errors import OutOfRangeError


class StepTable:
    """Column store of a flat step table.

    Columns are numpy arrays of equal length: ``event_id``, ``track_id``,
    ``step_index``, ``particle_code`` (integers) and ``pre_position``,
    ``post_position`` (shape (n, 3)).
    """

    INT_COLUMNS = ("event_id", "track_id", "step_index", "particle_code")
    POINT_COLUMNS = ("pre_position", "post_position")

    def __init__(self, columns: Mapping[str, Sequence]):
        missing = [c for c in self.INT_COLUMNS + self.POINT_COLUMNS if c not in columns]
        if missing:
            raise KeyError(f"Step table is missing columns: {missing}")

        self.columns: Dict[str, np.ndarray] = {}
        for name in self.INT_COLUMNS:
            self.columns[name] = np.asarray(columns[name], dtype=np.int64).reshape(-1)
        for name in self.POINT_COLUMNS:
            self.columns[name] = _as_points(columns[name])

        lengths = {len(v) for v in self.columns.values()}
        if len(lengths) > 1:
            raise ValueError(f"Step table columns have different lengths: {sorted(lengths)}")

    @classmethod
    def from_records(cls, records: Iterable[StepRecord]) -> "StepTable":
        records = list(records)
        return cls({
            "event_id": [r.event_id for r in records],
            "track_id": [r.track_id for r in records],
            "step_index": [r.step_index for r in records],
            "particle_code": [r.particle_code for r in records],
            "pre_position": [r.pre_position for r in records],
            "post_position": [r.post_position for r in records],
        })

    def __len__(self) -> int:
        return len(self.columns["event_id"])

    def __getitem__(self, name: str) -> np.ndarray:
        return self.columns[name]

    def row(self, index: int) -> StepRecord:
        """Return row ``index`` as a :class:`StepRecord`."""
        c = self.columns
        return StepRecord(
            event_id=int(c["event_id"][index]),
            track_id=int(c["track_id"][index]),
            step_index=int(c["step_index"][index]),
            particle_code=int(c["particle_code"][index]),
            pre_position=c["pre_position"][index],
            post_position=c["post_position"][index],
        )

    def event_ids(self) -> np.ndarray:
        """Sorted unique event ids present in the table."""
        return np.unique(self.columns["event_id"])


def _as_points(values) -> np.ndarray:
    """Convert a column of 3-vectors to a float array of shape (n, 3)."""
    arr = np.asarray(values)
    if arr.dtype == object:
        arr = np.stack([np.asarray(v, dtype=float) for v in arr]) if len(arr) else np.empty((0, 3))
    return np.asarray(arr, dtype=float).reshape(-1, 3)


def _vector(value) -> np.ndarray:
    """Read a position stored either as {x, y, z} or as a 3-sequence."""
    if isinstance(value, Mapping):
        return np.array([value["x"], value["y"], value["z"]], dtype=float)
    return np.asarray(value, dtype=float).reshape(3)


def track_from_dict(data: Mapping) -> Track:
    """Build a :class:`Track` from a decoded ``rootdata::Track`` record."""
    steps = [
        Step(
            position=_vector(step["position"]),
            kinetic_energy=step.get("kinetic_energy"),
            global_time=step.get("global_time"),
        )
        for step in data.get("steps", [])
    ]
    return Track(
        particle_code=int(data["pdg"]),
        track_id=int(data["id"]),
        parent_id=int(data.get("parent_id", 0)),
        vertex_position=_vector(data["vertex_position"]),
        steps=steps,
    )


def event_from_dict(data: Mapping) -> EventRecord:
    """Build an :class:`EventRecord` from a decoded ``rootdata::Event`` record."""
    return EventRecord(
        event_id=int(data["id"]),
        primary_tracks=[track_from_dict(t) for t in data.get("primaries", [])],
        secondary_tracks=[track_from_dict(t) for t in data.get("secondaries", [])],
    )


class MemoryStorage:
    """In-memory simulation output, used by tests and for scripting."""

    def __init__(
        self,
        steps: Optional[Union[StepTable, Iterable[StepRecord]]] = None,
        events: Optional[Sequence[EventRecord]] = None,
    ):
        if steps is not None and not isinstance(steps, StepTable):
            steps = StepTable.from_records(steps)
        self._steps = steps
        self._events = list(events) if events is not None else None

    def has_table(self, name: str) -> bool:
        if name == config.STEPS_TABLE:
            return self._steps is not None
        if name == config.EVENTS_TABLE:
            return self._events is not None
        return False

    def n_entries(self, name: str) -> int:
        if name == config.STEPS_TABLE and self._steps is not None:
            return len(self._steps)
        if name == config.EVENTS_TABLE and self._events is not None:
            return len(self._events)
        raise KeyError(f"No table named '{name}'")

    def read_steps(self) -> StepTable:
        if self._steps is None:
            raise KeyError(f"No table named '{config.STEPS_TABLE}'")
        return self._steps

    def read_event(self, index: int) -> EventRecord:
        if self._events is None:
            raise KeyError(f"No table named '{config.EVENTS_TABLE}'")
        if not 0 <= index < len(self._events):
            raise OutOfRangeError(f"Event entry {index} out of range [0, {len(self._events)})")
        return self._events[index]

    def close(self) -> None:
        pass


class RootStorage:
    """ROOT simulation output opened with uproot.

    Parameters
    ----------
    path : str or Path
        ROOT file written either by the Geant4 validation app ("events"
        tree with one ``event`` branch per entry) or by the step writer
        ("steps" tree, one row per step).
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if not self.path.is_file():
            raise FileNotFoundError(f"ROOT file '{self.path}' does not exist")
        self._file = uproot.open(str(self.path))
        self._tables = self._list_trees()

    def _list_trees(self) -> List[str]:
        names = []
        for key, obj in self._file.items(recursive=False):
            if isinstance(obj, uproot.behaviors.TTree.TTree):
                names.append(key.split(";")[0])
        return names

    def _tree(self, name: str):
        if name not in self._tables:
            raise KeyError(f"'{self.path}' has no TTree named '{name}'. Available: {self._tables}")
        return self._file[name]

    def has_table(self, name: str) -> bool:
        return name in self._tables

    def n_entries(self, name: str) -> int:
        return int(self._tree(name).num_entries)

    def read_steps(self) -> StepTable:
        tree = self._tree(config.STEPS_TABLE)
        branches = config.STEP_BRANCHES
        arrays = tree.arrays(list(branches.values()), library="np")
        return StepTable({column: arrays[branch] for column, branch in branches.items()})

    def read_event(self, index: int) -> EventRecord:
        tree = self._tree(config.EVENTS_TABLE)
        if not 0 <= index < tree.num_entries:
            raise OutOfRangeError(f"Event entry {index} out of range [0, {tree.num_entries})")
        array = tree[config.EVENT_BRANCH].array(entry_start=index, entry_stop=index + 1, library="ak")
        return event_from_dict(array.tolist()[0])

    def iter_events(self, start: int, stop: int) -> Iterator[EventRecord]:
        for index in range(start, stop):
            yield self.read_event(index)

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "RootStorage":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class CsvStorage:
    """Flat step table stored as CSV.

    Expected columns: ``event_id``, ``track_id``, ``track_step_count``,
    ``particle``, ``pre_pos_x``, ``pre_pos_y``, ``pre_pos_z``,
    ``post_pos_x``, ``post_pos_y``, ``post_pos_z``.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        if not self.path.is_file():
            raise FileNotFoundError(f"CSV file '{self.path}' does not exist")
        self._frame = pd.read_csv(self.path)

    def has_table(self, name: str) -> bool:
        return name == config.STEPS_TABLE

    def n_entries(self, name: str) -> int:
        if name != config.STEPS_TABLE:
            raise KeyError(f"No table named '{name}'")
        return len(self._frame)

    def read_steps(self) -> StepTable:
        df = self._frame
        branches = config.STEP_BRANCHES
        columns = {}
        for column in StepTable.INT_COLUMNS:
            columns[column] = df[branches[column]].to_numpy()
        for column in StepTable.POINT_COLUMNS:
            prefix = branches[column]
            columns[column] = df[[f"{prefix}_x", f"{prefix}_y", f"{prefix}_z"]].to_numpy(dtype=float)
        return StepTable(columns)

    def read_event(self, index: int) -> EventRecord:
        raise KeyError(f"No table named '{config.EVENTS_TABLE}'")

    def close(self) -> None:
        pass


def open_storage(path: Union[str, Path]):
    """Open a simulation output file based on its suffix.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the suffix is neither ``.root`` nor ``.csv``.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Simulation file '{path}' does not exist")

    suffix = path.suffix.lower()
    if suffix == config.ROOT_SUFFIX:
        return RootStorage(path)
    if suffix == config.CSV_SUFFIX:
        return CsvStorage(path)
    raise ValueError(f"Unsupported simulation file type '{path.suffix}' ({path})")
