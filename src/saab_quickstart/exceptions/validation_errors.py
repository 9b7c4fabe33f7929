"""
Custom exception classes for track data loading and filter handling.
"""

from typing import Optional


class TrackFixtureError(Exception):
    """Base exception for track fixture errors."""
    pass


class ResourceNotFoundError(TrackFixtureError, FileNotFoundError):
    """Exception for a missing track data resource."""
    def __init__(self, message: str, resource=None):
        super().__init__(message)
        self.resource = resource


class DataParsingError(TrackFixtureError):
    """Exception for a track data row that cannot be parsed."""
    def __init__(self, message: str, row_number: Optional[int] = None, value=None):
        super().__init__(message)
        self.row_number = row_number
        self.value = value


class FilterSyntaxError(TrackFixtureError):
    """Exception for filter text rejected by the ECQL grammar."""
    def __init__(self, message: str, cql: Optional[str] = None):
        super().__init__(message)
        self.cql = cql


class FilterEvaluationError(TrackFixtureError):
    """Exception for filter nodes that cannot be evaluated in memory."""
    def __init__(self, message: str, node=None):
        super().__init__(message)
        self.node = node


class SchemaError(TrackFixtureError):
    """Exception for invalid feature type specifications."""
    def __init__(self, message: str, spec: Optional[str] = None):
        super().__init__(message)
        self.spec = spec
