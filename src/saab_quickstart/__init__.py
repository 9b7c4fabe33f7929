"""
Saab quickstart track data - Source Package
"""

from .track_data import TrackFixture, SaabTrackData, parse_track_csv, parse_timestamp
from .schema import (
    AttributeDescriptor, FeatureSchema, parse_type_spec, build_track_schema,
    DEFAULT_DATE_KEY, TRACK_TYPE_NAME, TRACK_TYPE_SPEC
)
from .records import TrackRecord, records_to_geodataframe
from .filters import (
    Filter, Query, INCLUDE, parse_filter, create_filter,
    evaluate_filter, select_records
)
from .exceptions import (
    TrackFixtureError, ResourceNotFoundError, DataParsingError,
    FilterSyntaxError, FilterEvaluationError, SchemaError
)

__version__ = "0.1.0"

__all__ = [
    'TrackFixture',
    'SaabTrackData',
    'parse_track_csv',
    'parse_timestamp',
    'AttributeDescriptor',
    'FeatureSchema',
    'parse_type_spec',
    'build_track_schema',
    'DEFAULT_DATE_KEY',
    'TRACK_TYPE_NAME',
    'TRACK_TYPE_SPEC',
    'TrackRecord',
    'records_to_geodataframe',
    'Filter',
    'Query',
    'INCLUDE',
    'parse_filter',
    'create_filter',
    'evaluate_filter',
    'select_records',
    'TrackFixtureError',
    'ResourceNotFoundError',
    'DataParsingError',
    'FilterSyntaxError',
    'FilterEvaluationError',
    'SchemaError'
]
