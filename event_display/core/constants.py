"""
Particle codes and shared constants.
"""

from enum import IntEnum


class PDG(IntEnum):
    """PDG Monte Carlo codes of the particles with a dedicated style."""

    E_PLUS = -11
    E_MINUS = 11
    MU_MINUS = 13
    GAMMA = 22


# Debug flag
DEBUG = False

# Track id that never occurs in simulation output
NO_TRACK = None

# Default sort keys for the flat step table
STEP_SORT_KEYS = ("event_id", "track_id", "step_index")

# Length units accepted in GDML files, expressed in cm
LENGTH_UNITS_CM = {
    "nm": 1.0e-7,
    "um": 1.0e-4,
    "mm": 0.1,
    "cm": 1.0,
    "m": 100.0,
    "km": 1.0e5,
}
