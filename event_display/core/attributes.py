"""
Particle classification used to label and color tracks.
"""

from __future__ import annotations

from .. import config
from .constants import PDG
from .data_classes import TrackStyle


_LABELS = {
    PDG.GAMMA: "gamma",
    PDG.E_MINUS: "e-",
    PDG.E_PLUS: "e+",
    PDG.MU_MINUS: "mu-",
}

_COLORS = {
    PDG.GAMMA: config.GAMMA_COLOR,
    PDG.E_MINUS: config.ELECTRON_COLOR,
    PDG.E_PLUS: config.POSITRON_COLOR,
    PDG.MU_MINUS: config.MUON_COLOR,
}

DEFAULT_STYLE = TrackStyle(
    color=config.DEFAULT_TRACK_COLOR,
    marker_color=config.DEFAULT_TRACK_COLOR,
    label="other",
    show_points=False,
)


def particle_label(particle_code: int) -> str:
    """Return a short particle name, ``"pdg-<code>"`` for unknown codes.

    Example
    -------
    >>> particle_label(22)
    'gamma'
    >>> particle_label(2212)
    'pdg-2212'
    """
    code = int(particle_code)
    try:
        return _LABELS[PDG(code)]
    except ValueError:
        return f"pdg-{code}"


def track_style(particle_code: int, show_points: bool = False) -> TrackStyle:
    """Map a particle code to its drawing style.

    Only gamma, electron, positron and muon have their own color; every
    other code gets ``DEFAULT_STYLE``, which never shows step points.
    """
    try:
        pdg = PDG(int(particle_code))
    except ValueError:
        return DEFAULT_STYLE

    color = _COLORS[pdg]
    return TrackStyle(
        color=color,
        marker_color=color,
        label=_LABELS[pdg],
        show_points=show_points,
    )


class TrackClassifier:
    """Callable style lookup carrying the "show step points" option."""

    def __init__(self, show_points: bool = False):
        self.show_points = show_points

    def __call__(self, particle_code: int) -> TrackStyle:
        return track_style(particle_code, show_points=self.show_points)

    def label(self, particle_code: int) -> str:
        return particle_label(particle_code)
