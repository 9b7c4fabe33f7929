"""
Custom exception classes for track fixture processing
"""

from .validation_errors import (
    TrackFixtureError, ResourceNotFoundError, DataParsingError,
    FilterSyntaxError, FilterEvaluationError, SchemaError
)

__all__ = [
    'TrackFixtureError',
    'ResourceNotFoundError',
    'DataParsingError',
    'FilterSyntaxError',
    'FilterEvaluationError',
    'SchemaError'
]
