"""
Unit tests for configuration, logging and geometry utilities.
"""

import logging

import pytest
import yaml
from shapely.geometry import Point

from saab_quickstart.config.project_config import (
    LoggingConfig, ProjectConfig, get_config, update_config
)
from saab_quickstart.records import TrackRecord, records_to_geodataframe
from saab_quickstart.track_data import parse_timestamp
from saab_quickstart.utils import CRSUtils, GeometryUtils, setup_logging


class TestProjectConfig:
    """Test suite for configuration loading."""

    def test_defaults(self, project_config):
        """Defaults point at the bundled resource."""
        assert project_config.fixture.resource_name == "trackdata.csv"
        assert project_config.fixture.resource_path is None
        assert project_config.fixture.csv_encoding == "utf-8"
        assert project_config.logging.level == "INFO"

    def test_yaml_overrides(self, tmp_path):
        """YAML sections override matching attributes; unknown keys are ignored."""
        config_file = tmp_path / "config.yml"
        config_file.write_text(yaml.safe_dump({
            'fixture': {'resource_path': '/data/tracks.csv', 'unknown_key': 1},
            'logging': {'level': 'DEBUG'},
            'unknown_section': {'a': 1},
        }))

        config = ProjectConfig(str(config_file))
        assert config.fixture.resource_path == '/data/tracks.csv'
        assert config.logging.level == 'DEBUG'
        assert not hasattr(config.fixture, 'unknown_key')

    def test_missing_yaml_file(self, tmp_path):
        """A missing configuration file keeps the defaults."""
        config = ProjectConfig(str(tmp_path / "absent.yml"))
        assert config.fixture.resource_path is None

    def test_environment_overrides(self, monkeypatch):
        """SAAB_* variables override file and defaults."""
        monkeypatch.setenv('SAAB_TRACKDATA_PATH', '/tmp/tracks.csv  # comment')
        monkeypatch.setenv('SAAB_CSV_ENCODING', 'latin-1')
        monkeypatch.setenv('SAAB_LOG_LEVEL', 'warning')

        config = ProjectConfig()
        assert config.fixture.resource_path == '/tmp/tracks.csv'
        assert config.fixture.csv_encoding == 'latin-1'
        assert config.logging.level == 'WARNING'

    def test_save_and_reload(self, tmp_path, project_config):
        """Saved configuration loads back unchanged."""
        project_config.fixture.resource_path = '/data/tracks.csv'
        output = tmp_path / "out" / "config.yml"
        project_config.save_config(str(output))

        assert ProjectConfig(str(output)).to_dict() == project_config.to_dict()

    def test_global_config(self, tmp_path):
        """The global configuration is shared until updated."""
        assert get_config() is get_config()

        config_file = tmp_path / "config.yml"
        config_file.write_text(yaml.safe_dump({'fixture': {'csv_encoding': 'utf-16'}}))
        update_config(str(config_file))
        assert get_config().fixture.csv_encoding == 'utf-16'


class TestLogging:
    """Test suite for logging setup."""

    def test_setup_logging_is_idempotent(self):
        """Repeated setup keeps a single console handler."""
        config = LoggingConfig(level="DEBUG", main_logger="saab_quickstart.test_logging")
        logger = setup_logging(config)
        setup_logging(LoggingConfig(level="WARNING", main_logger="saab_quickstart.test_logging"))

        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        logger.handlers.clear()


class TestGeometryUtils:
    """Test suite for geometry helpers."""

    def test_point_wkt_longitude_first(self):
        """WKT points list longitude before latitude."""
        assert GeometryUtils.point_to_wkt(10.5, 20.5) == "POINT (10.5 20.5)"
        assert GeometryUtils.point_to_wkt(10, 20) == "POINT (10.0 20.0)"

    def test_make_point(self):
        """Points use x = longitude, y = latitude."""
        point = GeometryUtils.make_point(18.0432, 59.6484)
        assert isinstance(point, Point)
        assert (point.x, point.y) == (18.0432, 59.6484)

    @pytest.mark.parametrize("corners, expected", [
        ((0, 0, 10, 10), True),
        ((10, 10, 0, 0), True),
        ((5, 5, 10, 10), True),
        ((6, 0, 10, 10), False),
    ])
    def test_point_in_bbox(self, corners, expected):
        """Containment is boundary inclusive and corner order independent."""
        assert GeometryUtils.point_in_bbox(Point(5, 5), *corners) is expected

    def test_crs_from_srid(self):
        """EPSG codes resolve through pyproj."""
        assert CRSUtils.crs_from_srid(4326).to_epsg() == 4326
        assert CRSUtils.crs_from_srid(4326).is_geographic
        assert CRSUtils.crs_from_srid(32633).is_projected


class TestTrackRecord:
    """Test suite for track records."""

    @pytest.fixture
    def record(self):
        return TrackRecord(
            fid="T1",
            trackid="T1",
            callsign="CALL1",
            updatetime=parse_timestamp("2023-01-01 12:00:00.000"),
            loc=Point(10.5, 20.5),
        )

    def test_attributes_follow_schema_order(self, record):
        """Attributes are keyed by schema name, in schema order."""
        assert list(record.attributes) == ["trackid", "callsign", "updatetime", "loc"]
        assert record.get_attribute("callsign") == "CALL1"

    def test_unknown_attribute(self, record):
        """Unknown attribute names raise KeyError."""
        with pytest.raises(KeyError):
            record.get_attribute("altitude")

    def test_records_are_immutable(self, record):
        """Records cannot be modified."""
        with pytest.raises(AttributeError):
            record.callsign = "OTHER"

    def test_empty_geodataframe(self):
        """An empty record set still carries the geometry column and CRS."""
        gdf = records_to_geodataframe(())
        assert len(gdf) == 0
        assert gdf.geometry.name == "loc"
        assert gdf.crs.to_epsg() == 4326
