"""
Saab track data fixture.
Loads the bundled track CSV into typed records and provides canned queries
and filters for exercising a geospatial data store.
"""

import logging
import re
import threading
from datetime import datetime
from importlib import resources
from pathlib import Path
from typing import IO, Optional, Tuple, Union

import pandas as pd
import geopandas as gpd

from .config.project_config import ProjectConfig, get_config
from .exceptions.validation_errors import DataParsingError, ResourceNotFoundError
from .filters import INCLUDE, Filter, Query, create_filter
from .records import TrackRecord, records_to_geodataframe
from .schema import TRACK_TYPE_NAME, FeatureSchema, build_track_schema
from .utils.geometry_utils import GeometryUtils

logger = logging.getLogger(__name__)

# Date format used by the track CSV (yyyy-MM-dd HH:mm:ss.SSS), always UTC
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
TIMESTAMP_REGEX = r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}"

# trackid, callsign, timestamp, longitude, latitude
MIN_COLUMNS = 5
TRACKID_COL, CALLSIGN_COL, TIMESTAMP_COL, LONGITUDE_COL, LATITUDE_COL = range(MIN_COLUMNS)


def parse_timestamp(text: str) -> datetime:
    """
    Parse a single ``yyyy-MM-dd HH:mm:ss.SSS`` value as UTC.

    Raises:
    -------
    DataParsingError
        If the value does not match the format exactly
    """
    parsed = _parse_timestamps(pd.Series([text], dtype=object))
    return parsed.iloc[0].to_pydatetime()


def _strict_timestamp(text) -> pd.Timestamp:
    if not isinstance(text, str) or re.fullmatch(TIMESTAMP_REGEX, text) is None:
        raise ValueError(f"time data '{text}' does not match format 'yyyy-MM-dd HH:mm:ss.SSS'")
    return pd.to_datetime(text, format=TIMESTAMP_FORMAT, utc=True)


def _strict_coordinate(text) -> float:
    value = pd.to_numeric(text.strip())
    if pd.isna(value):
        raise ValueError(f"'{text}' is not a number")
    return float(value)


def _first_bad_row(mask: pd.Series) -> int:
    return int(mask[mask].index[0])


def _raise_row_error(values: pd.Series, mask: pd.Series, message: str, convert) -> None:
    """
    Raise DataParsingError for the first row flagged in ``mask``.

    The vectorized conversions only mark failures, so the failing value is
    converted again on its own and the resulting error becomes the cause.
    Row numbers count data rows; blank lines skipped by the reader are not
    included.
    """
    row = _first_bad_row(mask)
    value = values[row]
    error = DataParsingError(
        f"Data row {row + 1}: {message.format(value=value)}",
        row_number=row + 1,
        value=value,
    )
    try:
        convert(value)
    except (TypeError, ValueError) as e:
        raise error from e
    raise error


def _parse_timestamps(values: pd.Series) -> pd.Series:
    well_formed = values.astype(str).str.fullmatch(TIMESTAMP_REGEX) & values.notna()
    parsed = pd.to_datetime(values.where(well_formed), format=TIMESTAMP_FORMAT, utc=True, errors='coerce')
    if parsed.isna().any():
        _raise_row_error(
            values, parsed.isna(),
            "invalid timestamp '{value}', expected yyyy-MM-dd HH:mm:ss.SSS",
            _strict_timestamp,
        )
    return parsed


def _parse_coordinates(values: pd.Series, label: str) -> pd.Series:
    parsed = pd.to_numeric(values.str.strip(), errors='coerce')
    if parsed.isna().any():
        _raise_row_error(values, parsed.isna(), f"invalid {label} '{{value}}'", _strict_coordinate)
    return parsed.astype(float)


def parse_track_csv(source: Union[str, Path, IO[str]]) -> Tuple[TrackRecord, ...]:
    """
    Parse track CSV rows into records.

    Parameters:
    -----------
    source : str, Path or text stream
        CSV without a header row; the first five columns are trackid,
        callsign, timestamp, longitude and latitude. Rows may carry any
        number of further columns, which are ignored.

    Returns:
    --------
    Tuple[TrackRecord, ...]
        Records in row order, each identified by its trackid

    Raises:
    -------
    DataParsingError
        If any row is malformed; no partial result is returned.
        ``row_number`` counts data rows, not physical lines.
    """
    try:
        # Fixed names and usecols keep the width independent of the first row
        df = pd.read_csv(
            source,
            header=None,
            names=range(MIN_COLUMNS),
            usecols=range(MIN_COLUMNS),
            index_col=False,
            dtype=str,
            keep_default_na=False,
            engine='python',
        )
    except pd.errors.EmptyDataError:
        return ()
    except ValueError as e:
        # pandas ParserError and UnicodeDecodeError are both ValueErrors
        raise DataParsingError(f"Malformed track CSV: {e}") from e

    if df.empty:
        return ()

    # Short rows are padded with missing values
    df = df.reset_index(drop=True)
    short_rows = df.isna().any(axis=1)
    if short_rows.any():
        row = _first_bad_row(short_rows)
        fields = df.iloc[row].dropna().tolist()
        try:
            fields[LATITUDE_COL]
        except IndexError as e:
            raise DataParsingError(
                f"Data row {row + 1}: expected at least {MIN_COLUMNS} fields, found {len(fields)}",
                row_number=row + 1,
            ) from e

    timestamps = _parse_timestamps(df[TIMESTAMP_COL])
    longitudes = _parse_coordinates(df[LONGITUDE_COL], 'longitude')
    latitudes = _parse_coordinates(df[LATITUDE_COL], 'latitude')

    records = []
    for trackid, callsign, updatetime, lon, lat in zip(
            df[TRACKID_COL], df[CALLSIGN_COL], timestamps, longitudes, latitudes):
        # Use the track id as the feature id; geometry is longitude first
        records.append(TrackRecord(
            fid=trackid,
            trackid=trackid,
            callsign=callsign,
            updatetime=updatetime.to_pydatetime(),
            loc=GeometryUtils.make_point(lon, lat),
        ))

    return tuple(records)


class TrackFixture:
    """
    Static test data for the ``saab-quickstart`` feature type.

    Schema, records and queries are built on first access and cached for
    the lifetime of the fixture. First access is serialized by a lock, so
    the fixture may be shared between threads.
    """

    def __init__(self, resource_path: Optional[Union[str, Path]] = None,
                 config: Optional[ProjectConfig] = None):
        """
        Initialize the fixture.

        Parameters:
        -----------
        resource_path : str or Path, optional
            Track CSV to read instead of the bundled ``trackdata.csv``
        config : ProjectConfig, optional
            Configuration; defaults to the global configuration
        """
        self.config = config or get_config()
        self._resource_path = resource_path
        self._lock = threading.RLock()
        self._schema: Optional[FeatureSchema] = None
        self._features: Optional[Tuple[TrackRecord, ...]] = None
        self._queries: Optional[Tuple[Query, ...]] = None

    @property
    def type_name(self) -> str:
        return self.get_type_name()

    def get_type_name(self) -> str:
        return TRACK_TYPE_NAME

    def get_schema(self) -> FeatureSchema:
        """Feature type with ``updatetime`` as the default date for indexing."""
        with self._lock:
            if self._schema is None:
                self._schema = build_track_schema(self.get_type_name())
            return self._schema

    def resource(self):
        """Locate the track CSV: explicit path, configured path, then package data."""
        if self._resource_path is not None:
            return Path(self._resource_path)

        fixture_config = self.config.fixture
        if fixture_config.resource_path:
            return Path(fixture_config.resource_path)

        try:
            package_files = resources.files(fixture_config.resource_package)
        except ModuleNotFoundError as e:
            raise ResourceNotFoundError(
                f"Couldn't load resource {fixture_config.resource_name}: "
                f"no package {fixture_config.resource_package}",
                resource=fixture_config.resource_name,
            ) from e
        return package_files / fixture_config.resource_name

    def get_test_data(self) -> Tuple[TrackRecord, ...]:
        """
        Load and cache the track records.

        Returns:
        --------
        Tuple[TrackRecord, ...]
            Immutable records in CSV row order

        Raises:
        -------
        ResourceNotFoundError
            If the track CSV cannot be located
        DataParsingError
            If any row cannot be parsed; nothing is cached in that case
        """
        with self._lock:
            if self._features is None:
                # Make sure the schema exists before any record is built
                self.get_schema()

                resource = self.resource()
                if not resource.is_file():
                    raise ResourceNotFoundError(
                        f"Couldn't load resource {self.config.fixture.resource_name}: {resource}",
                        resource=str(resource),
                    )

                logger.info(f"Reading records from {resource}")
                try:
                    with resource.open('r', encoding=self.config.fixture.csv_encoding, newline='') as handle:
                        features = parse_track_csv(handle)
                except DataParsingError as e:
                    logger.error(f"Error reading Saab data from {resource}: {e}")
                    raise

                logger.info(f"Loaded {len(features)} track records")
                self._features = features
            return self._features

    def get_test_queries(self) -> Tuple[Query, ...]:
        """Single query returning every record; the data is meant to stream updates over time."""
        with self._lock:
            if self._queries is None:
                self._queries = (Query(self.get_type_name(), INCLUDE),)
            return self._queries

    def get_subset_filter(self) -> Filter:
        return INCLUDE

    create_filter = staticmethod(create_filter)

    def reset(self) -> None:
        """Drop cached records and queries so the next access reloads them."""
        with self._lock:
            self._features = None
            self._queries = None

    def to_geodataframe(self) -> gpd.GeoDataFrame:
        """Records as a GeoDataFrame indexed by feature id."""
        return records_to_geodataframe(self.get_test_data(), self.get_schema())


# Name used by the GeoMesa quickstart examples
SaabTrackData = TrackFixture
