# journeygeo/errors

"""
journeygeo.errors

Central exception hierarchy for journeygeo.

The analysis core never raises for thin or degenerate data (it returns None,
empty lists or sentinels). These errors belong to the edges: configuration,
loading journey/plan documents, and interactive selection.
"""


class JourneyGeoError(RuntimeError):
    """Base class for all journeygeo runtime errors."""


# ---- Configuration errors ----------------------

class ConfigError(JourneyGeoError):
    """A config file or override could not be parsed into usable values."""


# ---- Input data errors -------------------------

class DataError(JourneyGeoError):
    """Errors reading journey, plan or track documents."""

class InvalidJourneyError(DataError):
    """A journey document is missing required fields or has malformed values."""

class InvalidPlanError(DataError):
    """An exposure plan document is missing required fields or has malformed values."""

class InvalidGpxError(DataError):
    """GPX file could not be parsed or did not contain expected data structures."""


# ---- Selection errors --------------------------

class SelectionError(JourneyGeoError):
    """Errors in interactive file selection."""

class FzfNotFoundError(SelectionError):
    """fzf is required but not available on PATH."""
