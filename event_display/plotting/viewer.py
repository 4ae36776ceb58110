"""
Main viewer: geometry plus tracks in a 3D view and orthogonal projections.

The viewer produces two figures, mirroring the two tabs of a classic
event display: the main 3D view and a "Projections" figure with XY, ZY,
XZ and 3D views side by side.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import numpy as np
import matplotlib.pyplot as plt

from .. import config
from ..core.geometry import find_node, hide_volume, load_gdml
from .scene import AXIS_LABELS, PROJECTIONS, Scene


def _set_axes_equal(ax) -> None:
    """Set equal aspect ratio for 3D axes."""
    limits = np.array(
        [ax.get_xlim3d(), ax.get_ylim3d(), ax.get_zlim3d()],
        dtype=float,
    )
    spans = limits[:, 1] - limits[:, 0]
    centres = np.mean(limits, axis=1)
    half = max(spans) / 2.0
    ax.set_xlim3d(centres[0] - half, centres[0] + half)
    ax.set_ylim3d(centres[1] - half, centres[1] + half)
    ax.set_zlim3d(centres[2] - half, centres[2] + half)


def _set_window_title(fig, title: str) -> None:
    manager = fig.canvas.manager
    if manager is not None:
        manager.set_window_title(title)


class MainViewer:
    """Event display built on a GDML geometry.

    Example
    -------
    >>> viewer = MainViewer("detector.gdml")
    >>> viewer.set_vis_level(2)
    >>> viewer.add_world_volume()
    >>> EventViewer("run.root").add_event(0, viewer.scene)
    >>> viewer.start_viewer()
    """

    def __init__(self, gdml_path: str, scene: Optional[Scene] = None):
        self.gdml_path = str(gdml_path)
        self.top_volume = load_gdml(self.gdml_path)
        self.scene = scene if scene is not None else Scene()
        self.vis_level = config.DEFAULT_VIS_LEVEL

    def set_vis_level(self, vis_level: int) -> None:
        """Number of levels of daughter volumes drawn."""
        if vis_level < 0:
            raise ValueError(f"vis_level must be non-negative, got {vis_level}")
        self.vis_level = vis_level

    def add_world_volume(self) -> None:
        """Add the whole geometry, from the world volume down."""
        self.scene.add_global_element(self.top_volume, self.vis_level)

    def add_cms_volume(self) -> None:
        """Add the CMS 2018 detector without its building and LHC elements.

        Falls back to :meth:`add_world_volume` for any other geometry.
        """
        cms_node = find_node(self.top_volume, config.CMS_TOP_NODE)
        if cms_node is None:
            print("[warning] Not the CMS 2018 geometry")
            self.add_world_volume()
            return

        print("[info] CMS building and LHC elements are set to invisible")
        for name in config.CMS_INVISIBLE_NODES:
            node = find_node(cms_node, name)
            if node is None:
                print(f"[warning] Volume {name} not found, skipping")
                continue
            hide_volume(node)

        self.scene.add_global_element(cms_node, self.vis_level)

    def draw_main_view(self) -> plt.Figure:
        """3D view of the scene."""
        fig = plt.figure(figsize=config.MAIN_VIEW_FIGSIZE)
        _set_window_title(fig, config.WINDOW_TITLE)
        ax = fig.add_subplot(111, projection='3d')
        self._draw_3d(ax)
        ax.set_title(config.MAIN_VIEW_TITLE, fontsize=14, fontweight='bold')
        plt.tight_layout()
        return fig

    def draw_projections(self) -> plt.Figure:
        """2x2 grid: XY, ZY (top), XZ, 3D (bottom)."""
        fig = plt.figure(figsize=config.PROJECTIONS_FIGSIZE)
        _set_window_title(fig, f"{config.WINDOW_TITLE} - {config.PROJECTIONS_TITLE}")

        for slot, name in ((1, "XY"), (2, "ZY"), (3, "XZ")):
            ax = fig.add_subplot(2, 2, slot)
            self.scene.draw(ax, projection=name)
            i, j = PROJECTIONS[name]
            ax.set_xlabel(AXIS_LABELS[i], fontsize=11)
            ax.set_ylabel(AXIS_LABELS[j], fontsize=11)
            ax.set_title(f"{name} View", fontsize=12, fontweight='bold')
            ax.set_aspect('equal', adjustable='datalim')
            ax.grid(True, alpha=0.3)

        ax3d = fig.add_subplot(2, 2, 4, projection='3d')
        self._draw_3d(ax3d)
        ax3d.set_title("3D View", fontsize=12, fontweight='bold')

        plt.suptitle(f"{config.PROJECTIONS_TITLE} (tracks={len(self.scene.elements)})",
                     fontsize=14, fontweight='bold')
        return fig

    def _draw_3d(self, ax) -> None:
        self.scene.draw(ax)
        bounds = self.scene.bounds()
        if bounds is not None:
            low, high = bounds
            ax.set_xlim3d(low[0], high[0])
            ax.set_ylim3d(low[1], high[1])
            ax.set_zlim3d(low[2], high[2])
            _set_axes_equal(ax)
        ax.set_xlabel(AXIS_LABELS[0])
        ax.set_ylabel(AXIS_LABELS[1])
        ax.set_zlabel(AXIS_LABELS[2])

    def start_viewer(self, save_path: Optional[str] = None, show: bool = True, dpi: int = config.PLOT_DPI):
        """Draw both figures, optionally save them, and show them.

        Parameters
        ----------
        save_path : str, optional
            Base path; figures are written to ``<save_path>_3d.png`` and
            ``<save_path>_projections.png``.
        show : bool
            Whether to display the figures interactively (blocks).

        Returns
        -------
        (main_fig, projections_fig) or None
            The figures when neither shown nor saved.
        """
        main_fig = self.draw_main_view()
        proj_fig = self.draw_projections()

        if save_path:
            Path(save_path).parent.mkdir(parents=True, exist_ok=True)
            for fig, suffix in ((main_fig, config.MAIN_VIEW_SUFFIX),
                                (proj_fig, config.PROJECTIONS_SUFFIX)):
                fig.savefig(f"{save_path}{suffix}", dpi=dpi, bbox_inches='tight')
                print(f"[info] Saved view to {save_path}{suffix}")

        if show:
            plt.show()
            return None
        if save_path:
            plt.close(main_fig)
            plt.close(proj_fig)
            return None
        return main_fig, proj_fig
