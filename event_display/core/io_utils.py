"""
Export utilities for assembled tracks.
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, List

from .data_classes import Polyline


POLYLINE_HEADERS = [
    'event_id',
    'track_id',
    'particle',
    'name',
    'point_index',
    'x_cm',
    'y_cm',
    'z_cm',
]


def export_polylines_to_csv(polylines: Iterable[Polyline], filename: str = "tracks.csv") -> int:
    """Export track polylines to a CSV file, one row per point.

    Parameters
    ----------
    polylines : iterable of Polyline
        Tracks to export.
    filename : str
        Output CSV filename.

    Returns
    -------
    int
        Number of tracks written.
    """
    polylines: List[Polyline] = list(polylines)
    if not polylines:
        print("[warning] No tracks to export.")
        return 0

    output_path = Path(filename)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(filename, 'w', newline='', encoding='utf-8') as csvfile:
        writer = csv.writer(csvfile)
        writer.writerow(POLYLINE_HEADERS)

        for line in polylines:
            for point_index, (x, y, z) in enumerate(line.points):
                writer.writerow([
                    line.event_id,
                    line.track_id,
                    line.particle_code,
                    line.name,
                    point_index,
                    x,
                    y,
                    z,
                ])

    total_points = sum(len(line) for line in polylines)
    print(f"[info] Tracks exported to {filename}")
    print(f"[info] Total tracks: {len(polylines)}")
    print(f"[info] Total track points: {total_points}")
    return len(polylines)
