"""
Event Display Runner Module

This module provides the command-line entry point of the event display.

Usage:
    event-display detector.gdml
    event-display detector.gdml run.root -e 3 -vis 2 -s
    event-display cms2018.gdml run.root -cms -e -1 --save Figures/all_events
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import List, Optional, Sequence

from . import config
from .core.errors import (
    EventDisplayError,
    MissingRequiredInputError,
    OutOfRangeError,
)
from .core.io_utils import export_polylines_to_csv
from .core.source import EventViewer
from .plotting.viewer import MainViewer


@dataclass
class TerminalInput:
    """Options collected from the command line. Only the GDML file is required."""

    gdml_file: str = ""
    sim_file: str = ""
    event_id: int = config.DEFAULT_EVENT_ID
    vis_level: int = config.DEFAULT_VIS_LEVEL
    is_cms: bool = False
    show_steps: bool = False
    max_tracks: Optional[int] = config.DEFAULT_MAX_TRACKS
    save_path: Optional[str] = None
    export_csv: Optional[str] = None
    show: bool = True

    def __bool__(self) -> bool:
        return bool(self.gdml_file)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="event-display",
        description="Geometry and event display for GDML geometries and Monte Carlo truth output",
    )
    parser.add_argument("files", nargs="*",
                        help="GDML geometry (*.gdml) and optional simulation output (*.root, *.csv)")
    parser.add_argument("-e", "--event", dest="event_id", type=int, default=config.DEFAULT_EVENT_ID,
                        help="Event to draw; a negative value draws all events")
    parser.add_argument("-vis", "--vis-level", dest="vis_level", type=int, default=config.DEFAULT_VIS_LEVEL,
                        help="Number of geometry levels drawn below the top volume")
    parser.add_argument("-s", "--show-steps", dest="show_steps", action="store_true",
                        help="Draw step points along the tracks")
    parser.add_argument("-cms", "--cms", dest="is_cms", action="store_true",
                        help="Hide the CMS building and LHC elements (cms2018.gdml)")
    parser.add_argument("--max-tracks", type=int, default=config.DEFAULT_MAX_TRACKS,
                        help="Maximum number of tracks drawn")
    parser.add_argument("--save", dest="save_path", default=None,
                        help="Base path for saving the figures")
    parser.add_argument("--export-csv", default=None,
                        help="Write the drawn tracks to this CSV file")
    parser.add_argument("--no-show", action="store_true",
                        help="Don't open the interactive windows")
    return parser


def parse(argv: Sequence[str]) -> TerminalInput:
    """Parse command-line arguments.

    Input files are recognised by their extension; unknown parameters are
    reported and skipped.

    Raises
    ------
    MissingRequiredInputError
        If no GDML file was given.
    """
    args, unknown = build_parser().parse_known_args(list(argv))

    terminal_input = TerminalInput(
        event_id=args.event_id,
        vis_level=args.vis_level,
        is_cms=args.is_cms,
        show_steps=args.show_steps,
        max_tracks=args.max_tracks,
        save_path=args.save_path,
        export_csv=args.export_csv,
        show=not args.no_show,
    )

    for arg in list(args.files) + unknown:
        lowered = arg.lower()
        if lowered.endswith("gdml"):
            terminal_input.gdml_file = arg
        elif lowered.endswith(config.ROOT_SUFFIX) or lowered.endswith(config.CSV_SUFFIX):
            terminal_input.sim_file = arg
        else:
            print(f"[warning] Parameter {arg} not known. Skipping...")

    if not terminal_input:
        raise MissingRequiredInputError("No GDML file specified")
    return terminal_input


def run(terminal_input: TerminalInput) -> int:
    """Execute with parsed input. Returns the process exit status."""
    evd = MainViewer(terminal_input.gdml_file)
    evd.set_vis_level(terminal_input.vis_level)

    if terminal_input.is_cms:
        evd.add_cms_volume()
    else:
        evd.add_world_volume()

    status = 0
    if terminal_input.sim_file:
        event_viewer = EventViewer(
            terminal_input.sim_file,
            show_step_points=terminal_input.show_steps,
            max_tracks=terminal_input.max_tracks,
            progress=True,
        )
        try:
            event_viewer.add_event(terminal_input.event_id, evd.scene)
        except OutOfRangeError as e:
            # Geometry is still displayed
            print(f"[error] {e}")
            status = 1
        finally:
            event_viewer.close()

        if terminal_input.export_csv and evd.scene.elements:
            export_polylines_to_csv(evd.scene.elements, terminal_input.export_csv)

    evd.start_viewer(save_path=terminal_input.save_path, show=terminal_input.show)
    return status


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    import sys

    if argv is None:
        argv = sys.argv[1:]

    if not argv:
        build_parser().print_help()
        return 1

    try:
        terminal_input = parse(argv)
        return run(terminal_input)
    except MissingRequiredInputError as e:
        print(f"[error] {e}. Run with --help for information.")
        return 1
    except (EventDisplayError, FileNotFoundError, ValueError) as e:
        print(f"[error] {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
