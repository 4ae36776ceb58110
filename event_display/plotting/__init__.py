"""
Plotting subpackage for the event display.

This subpackage provides the rendering side of the viewer:
- Scene: geometry volumes and track polylines
- MainViewer: 3D view and XY/ZY/XZ projections built with matplotlib

Example usage:
    from event_display.plotting import MainViewer
    from event_display.core import EventViewer

    viewer = MainViewer('detector.gdml')
    viewer.add_world_volume()
    EventViewer('run.root').add_event(0, viewer.scene)
    viewer.start_viewer(save_path='Figures/event0')
"""

from .scene import (
    Scene,
    solid_wireframe,
    PROJECTIONS,
)

from .viewer import MainViewer

__all__ = [
    "Scene",
    "solid_wireframe",
    "PROJECTIONS",
    "MainViewer",
]
