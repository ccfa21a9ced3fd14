# almanac/core/errors.py
# -----------------------------------------------------------------------------
# Almanac Error Taxonomy
#
# Classes:
#   • Malformed input at the boundary (location, body names, star catalog)
#   • Refinement failures inside the occultation search
#   • Event buffer exhaustion
#   • Frame validation drift against ERFA
#
# All errors are deterministic: retrying with the same input fails the same way.
# -----------------------------------------------------------------------------

from __future__ import annotations

from enum import Enum

__all__ = [
    "ErrorClass",
    "AlmanacError",
    "InputError",
    "LocationError",
    "BodyLookupError",
    "CatalogError",
    "RefinementError",
    "EventOverflowError",
    "ValidationError",
]


class ErrorClass(Enum):
    MALFORMED_INPUT = "malformed_input"
    ALGORITHM_INSTABILITY = "algorithm_instability"
    RESOURCE_EXHAUSTED = "resource_exhausted"
    VALIDATION_FAILURE = "validation_failure"


class AlmanacError(Exception):
    """Base exception for ephemeris and event-search computations."""
    def __init__(self, message: str, error_class: ErrorClass, **context):
        super().__init__(message)
        self.error_class = error_class
        self.context = context


class InputError(AlmanacError):
    """External input could not be parsed."""
    def __init__(self, message: str, **context):
        super().__init__(message, ErrorClass.MALFORMED_INPUT, **context)


class LocationError(InputError):
    """Observer location triple is malformed."""


class BodyLookupError(InputError):
    """Body name does not match any catalog or display name."""


class CatalogError(InputError):
    """Star catalog line is malformed."""


class RefinementError(AlmanacError):
    """Occultation refinement lost a minimum the previous stage found."""
    def __init__(self, message: str, **context):
        super().__init__(message, ErrorClass.ALGORITHM_INSTABILITY, **context)


class EventOverflowError(AlmanacError):
    """Event buffer reached its capacity."""
    def __init__(self, message: str, **context):
        super().__init__(message, ErrorClass.RESOURCE_EXHAUSTED, **context)


class ValidationError(AlmanacError):
    """Frame quantities drifted from the ERFA reference."""
    def __init__(self, message: str, **context):
        super().__init__(message, ErrorClass.VALIDATION_FAILURE, **context)
