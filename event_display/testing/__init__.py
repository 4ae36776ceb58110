"""
Testing subpackage for the event display.

This subpackage provides tools for testing and debugging the viewer:
- Synthetic step tables, event records and GDML files
- Validation of assembled tracks

Example usage:
    from event_display.testing import create_step_table, run_quick_test

    table = create_step_table(n_events=2, shuffle=True)
    assert run_quick_test()
"""

from .synthetic import (
    create_track_steps,
    create_step_records,
    create_step_table,
    create_track,
    create_event_records,
    create_memory_storage,
    create_simple_gdml,
    write_step_csv,
    summarize_polylines,
)

from .validation import (
    validate_polylines,
    validate_against_table,
    expected_track_points,
    run_quick_test,
)

__all__ = [
    # Synthetic inputs
    "create_track_steps",
    "create_step_records",
    "create_step_table",
    "create_track",
    "create_event_records",
    "create_memory_storage",
    "create_simple_gdml",
    "write_step_csv",
    "summarize_polylines",
    # Validation
    "validate_polylines",
    "validate_against_table",
    "expected_track_points",
    "run_quick_test",
]
