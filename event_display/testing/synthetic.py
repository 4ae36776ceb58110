"""
Synthetic Inputs for Testing and Debugging
==========================================

This module builds small, fully controlled inputs that can be used in
place of real simulation output and detector geometry:
- flat step tables with straight-line tracks, optionally shuffled to mimic
  the storage order of a real step writer
- embedded event records with primary and secondary tracks
- GDML files with a handful of primitive volumes

All positions are in cm.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from .. import config
from ..core.constants import PDG
from ..core.data_classes import EventRecord, Step, StepRecord, Track
from ..core.storage import MemoryStorage, StepTable


DEFAULT_PARTICLES = (PDG.GAMMA, PDG.E_MINUS, PDG.E_PLUS, PDG.MU_MINUS, 2212)


def create_track_steps(
    event_id: int,
    track_id: int,
    particle_code: int,
    n_steps: int = 4,
    start: Sequence[float] = (0.0, 0.0, 0.0),
    direction: Sequence[float] = (0.0, 0.0, 1.0),
    step_length: float = 1.0,
) -> List[StepRecord]:
    """Steps of a straight track; step ``k`` ends at ``start + (k+1)*step_length*direction``."""
    start = np.asarray(start, dtype=float)
    direction = np.asarray(direction, dtype=float)
    direction = direction / np.linalg.norm(direction)

    records = []
    for k in range(n_steps):
        records.append(StepRecord(
            event_id=event_id,
            track_id=track_id,
            step_index=k + 1,
            particle_code=int(particle_code),
            pre_position=start + k * step_length * direction,
            post_position=start + (k + 1) * step_length * direction,
        ))
    return records


def create_step_records(
    n_events: int = 3,
    tracks_per_event: int = 4,
    steps_per_track: int = 5,
    particles: Sequence[int] = DEFAULT_PARTICLES,
    shuffle: bool = True,
    seed: Optional[int] = 0,
) -> List[StepRecord]:
    """Step records of several events, in storage order.

    Track ids restart at 1 in every event, so the same track id appears in
    different events. With ``shuffle`` the rows are randomly permuted.
    """
    rng = np.random.default_rng(seed)
    records: List[StepRecord] = []
    for event_id in range(n_events):
        for t in range(tracks_per_event):
            direction = rng.normal(size=3)
            records.extend(create_track_steps(
                event_id=event_id,
                track_id=t + 1,
                particle_code=particles[t % len(particles)],
                n_steps=steps_per_track,
                start=rng.uniform(-5.0, 5.0, size=3),
                direction=direction,
                step_length=rng.uniform(0.5, 2.0),
            ))

    if shuffle:
        order = rng.permutation(len(records))
        records = [records[i] for i in order]
    return records


def create_step_table(**kwargs) -> StepTable:
    """:class:`StepTable` from :func:`create_step_records`."""
    return StepTable.from_records(create_step_records(**kwargs))


def create_track(
    track_id: int,
    particle_code: int,
    n_steps: int = 3,
    parent_id: int = 0,
    vertex: Sequence[float] = (0.0, 0.0, 0.0),
    direction: Sequence[float] = (1.0, 0.0, 0.0),
    step_length: float = 1.0,
) -> Track:
    """Embedded track moving in a straight line from ``vertex``."""
    vertex = np.asarray(vertex, dtype=float)
    direction = np.asarray(direction, dtype=float)
    steps = [
        Step(position=vertex + (k + 1) * step_length * direction, kinetic_energy=10.0 / (k + 1))
        for k in range(n_steps)
    ]
    return Track(
        particle_code=int(particle_code),
        track_id=track_id,
        parent_id=parent_id,
        vertex_position=vertex,
        steps=steps,
    )


def create_event_records(
    n_events: int = 3,
    n_primaries: int = 1,
    n_secondaries: int = 2,
    steps_per_track: int = 3,
) -> List[EventRecord]:
    """Embedded event records; secondaries are children of the first primary."""
    events = []
    for event_id in range(n_events):
        primaries = [
            create_track(p + 1, PDG.E_MINUS, steps_per_track)
            for p in range(n_primaries)
        ]
        secondaries = [
            create_track(
                n_primaries + s + 1,
                PDG.GAMMA,
                steps_per_track,
                parent_id=1,
                vertex=(0.0, float(s), 0.0),
                direction=(0.0, 0.0, 1.0),
            )
            for s in range(n_secondaries)
        ]
        events.append(EventRecord(event_id, primaries, secondaries))
    return events


def create_memory_storage(
    schema: str = config.STEPS_TABLE, **kwargs
) -> MemoryStorage:
    """Storage exposing either a "steps" or an "events" table."""
    if schema == config.STEPS_TABLE:
        return MemoryStorage(steps=create_step_table(**kwargs))
    if schema == config.EVENTS_TABLE:
        return MemoryStorage(events=create_event_records(**kwargs))
    raise ValueError(f"Unknown schema '{schema}'")


def write_step_csv(records: Sequence[StepRecord], filename: Union[str, Path]) -> Path:
    """Write step records in the CSV layout read by ``CsvStorage``."""
    import pandas as pd

    branches = config.STEP_BRANCHES
    rows = []
    for r in records:
        row = {
            branches["event_id"]: r.event_id,
            branches["track_id"]: r.track_id,
            branches["step_index"]: r.step_index,
            branches["particle_code"]: r.particle_code,
        }
        for column in ("pre_position", "post_position"):
            prefix = branches[column]
            for axis, value in zip("xyz", getattr(r, column)):
                row[f"{prefix}_{axis}"] = float(value)
        rows.append(row)

    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    pd.DataFrame(rows).to_csv(path, index=False)
    return path


_GDML_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<gdml xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">
  <define>
    <constant name="HALFPI" value="1.5707963267948966"/>
    <position name="tracker_pos" x="0" y="0" z="100" unit="mm"/>
    <rotation name="tilt" x="0" y="90" z="0" unit="deg"/>
  </define>
  <materials/>
  <solids>
    <box name="world_box" x="{world}" y="{world}" z="{world}" lunit="mm"/>
    <box name="hall_box" x="{hall}" y="{hall}" z="{hall}" lunit="mm"/>
    <tube name="tracker_tube" rmin="10" rmax="50" z="200" startphi="0" deltaphi="360" aunit="deg" lunit="mm"/>
    <sphere name="target_sphere" rmin="0" rmax="2" startphi="0" deltaphi="360" starttheta="0" deltatheta="180" aunit="deg" lunit="cm"/>
    <cone name="odd_shape" rmin1="0" rmax1="10" rmin2="0" rmax2="5" z="20" startphi="0" deltaphi="360" aunit="deg" lunit="mm"/>
  </solids>
  <structure>
    <volume name="Tracker">
      <materialref ref="G4_Si"/>
      <solidref ref="tracker_tube"/>
    </volume>
    <volume name="Target">
      <materialref ref="G4_W"/>
      <solidref ref="target_sphere"/>
    </volume>
    <volume name="Odd">
      <materialref ref="G4_AIR"/>
      <solidref ref="odd_shape"/>
    </volume>
    <volume name="Hall">
      <materialref ref="G4_AIR"/>
      <solidref ref="hall_box"/>
      <physvol name="{tracker_name}">
        <volumeref ref="Tracker"/>
        <positionref ref="tracker_pos"/>
      </physvol>
      <physvol name="target_pv">
        <volumeref ref="Target"/>
        <position name="target_pos" x="0" y="0" z="-5" unit="cm"/>
        <rotationref ref="tilt"/>
      </physvol>
      <physvol name="odd_pv">
        <volumeref ref="Odd"/>
      </physvol>
    </volume>
    <volume name="World">
      <materialref ref="G4_Galactic"/>
      <solidref ref="world_box"/>
      <physvol name="{hall_name}">
        <volumeref ref="Hall"/>
      </physvol>
    </volume>
  </structure>
  <setup name="Default" version="1.0">
    <world ref="World"/>
  </setup>
</gdml>
"""


def create_simple_gdml(
    filename: Union[str, Path],
    world_size_mm: float = 1000.0,
    hall_size_mm: float = 800.0,
    hall_name: str = "hall_pv",
    tracker_name: str = "tracker_pv",
) -> Path:
    """Write a small GDML geometry.

    The hierarchy is World (box) > Hall (box) > {Tracker (tube),
    Target (sphere), Odd (cone, drawn from its mesh)}. ``hall_name`` sets the
    physical volume name of the hall, e.g. to mimic the CMS top node, and
    ``tracker_name`` the one of the tracker.
    """
    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(_GDML_TEMPLATE.format(world=world_size_mm, hall=hall_size_mm,
                                             hall_name=hall_name, tracker_name=tracker_name),
                    encoding="utf-8")
    return path


def summarize_polylines(polylines) -> List[Tuple[Tuple[int, int], int]]:
    """``[((event_id, track_id), n_points), ...]`` for quick inspection."""
    return [(line.key, len(line)) for line in polylines]
