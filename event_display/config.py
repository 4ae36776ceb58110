"""
Configuration settings for the event display.

This module contains all configurable parameters of the viewer. Users can
modify these values to customize the display without changing the core code.
"""

from __future__ import annotations

# =============================================================================
# Simulation Input
# =============================================================================

# Table (TTree) names recognised in simulation output files
EVENTS_TABLE = "events"
STEPS_TABLE = "steps"

# Branch holding the embedded event record in the "events" table
EVENT_BRANCH = "event"

# Step writer branch names
STEP_BRANCHES = {
    "event_id": "event_id",
    "track_id": "track_id",
    "step_index": "track_step_count",
    "particle_code": "particle",
    "pre_position": "pre_pos",
    "post_position": "post_pos",
}

# Supported simulation file suffixes
ROOT_SUFFIX = ".root"
CSV_SUFFIX = ".csv"

# =============================================================================
# Track Assembly
# =============================================================================

# Default event to draw (negative draws all events)
DEFAULT_EVENT_ID = 0

# Tracks with fewer points than this are not handed to the scene
MIN_TRACK_POINTS = 2

# Maximum number of tracks per add_event call (None means unlimited)
DEFAULT_MAX_TRACKS = None

# Multiplicative factor applied to simulation positions.
# Simulation output and GDML geometry are both expressed in cm here.
POSITION_SCALE = 1.0

# =============================================================================
# Geometry
# =============================================================================

# Number of nested volume levels drawn below the top volume
DEFAULT_VIS_LEVEL = 1

# GDML lengths are converted to this unit
GEOMETRY_LENGTH_UNIT = "cm"

# CMS 2018 geometry: top node and LHC/building elements hidden in -cms mode
CMS_TOP_NODE = "CMSE0x7f4a8f616d40"
CMS_INVISIBLE_NODES = (
    "CMStoZDC0x7f4a9a757000",
    "ZDCtoFP4200x7f4a9a757180",
    "BEAM30x7f4a8f615040",
    "BEAM20x7f4a9a75ae00",
    "VCAL0x7f4a8f615540",
    "CastorF0x7f4a8f615f80",
    "CastorB0x7f4a8f616080",
    "TotemT20x7f4a8f615ac0",
    "OQUA0x7f4a8f616600",
    "BSC20x7f4a8f616740",
    "ZDC0x7f4a8f6168c0",
)

# =============================================================================
# Visualization Settings
# =============================================================================

WINDOW_TITLE = "Event Display"
MAIN_VIEW_TITLE = "Main viewer"
PROJECTIONS_TITLE = "Projections"

# Track colors per particle family
GAMMA_COLOR = "#008800"
ELECTRON_COLOR = "#3399ff"
POSITRON_COLOR = "#990000"
MUON_COLOR = "#ff9900"
DEFAULT_TRACK_COLOR = "gray"

TRACK_LINE_WIDTH = 1.0
TRACK_ALPHA = 0.8
STEP_MARKER_SIZE = 6

# Geometry wireframe settings
VOLUME_COLOR = "steelblue"
VOLUME_ALPHA = 0.35
VOLUME_LINE_WIDTH = 0.6
CIRCLE_SEGMENTS = 48

# Figure sizes and resolution
MAIN_VIEW_FIGSIZE = (10, 10)
PROJECTIONS_FIGSIZE = (14, 12)
PLOT_DPI = 150

# Output file suffixes appended to --save base path
MAIN_VIEW_SUFFIX = "_3d.png"
PROJECTIONS_SUFFIX = "_projections.png"
