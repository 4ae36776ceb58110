"""
Event Display Package
=====================

This package provides a detector event display: it loads a GDML geometry
and optional Monte Carlo truth output (ROOT or CSV), assembles one
polyline per simulated track and draws geometry and tracks in a 3D view
with XY, ZY and XZ projections.

Modules:
--------
- config: Configurable display parameters
- core.data_classes: Data structures (StepRecord, Track, EventRecord, Polyline)
- core.attributes: Particle labels and track colors
- core.selection: Event selection and step ordering
- core.assembly: Track assembly from step tables and event records
- core.storage: ROOT / CSV readers
- core.source: Input layout detection (EventViewer)
- core.geometry: GDML volume tree
- plotting: Scene and MainViewer
- runner: Command-line entry point
"""

from . import config
from .core import *
from .core import __all__ as _core_all
from .plotting import Scene, MainViewer

__version__ = "1.0.0"
__all__ = ["config", "Scene", "MainViewer"] + list(_core_all)
