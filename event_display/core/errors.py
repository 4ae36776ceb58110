"""
Exceptions raised by the event display.
"""


class EventDisplayError(Exception):
    """Base class for all event display errors."""


class OutOfRangeError(EventDisplayError, IndexError):
    """Requested event id is not present in the simulation output."""


class EventNotFoundError(OutOfRangeError):
    """No step record matches the requested event id."""


class UnsupportedSchemaError(EventDisplayError, ValueError):
    """Simulation output has neither an "events" nor a "steps" table."""


class MissingRequiredInputError(EventDisplayError, ValueError):
    """No geometry file was supplied."""


class MalformedRecordError(EventDisplayError, ValueError):
    """Step records cannot be put in a strict per-track order."""
