"""
Unit tests for ECQL filter construction and evaluation.
"""

import pytest
from pygeofilter import ast

from saab_quickstart.filters import (
    INCLUDE, Filter, Query, create_filter, evaluate_filter, parse_filter, select_records
)
from saab_quickstart.track_data import TrackFixture, parse_track_csv
from saab_quickstart.exceptions import FilterEvaluationError, FilterSyntaxError
from fixtures.sample_track_data import generate_sample_rows, write_track_csv

T0 = "2020-01-01T00:00:00.000Z"
T1 = "2020-01-02T00:00:00.000Z"


class TestCreateFilter:
    """Test suite for bounding box and date range filters."""

    def test_filter_text(self):
        """BBOX, DURING and INCLUDE are joined with AND in that order."""
        flt = create_filter("loc", 0, 0, 10, 10, "updatetime", T0, T1, None)

        assert flt.cql == (
            "BBOX(loc, 0.0, 0.0, 10.0, 10.0) AND "
            "(updatetime DURING 2020-01-01T00:00:00.000Z/2020-01-02T00:00:00.000Z) AND "
            "INCLUDE"
        )
        assert str(flt) == flt.cql
        assert isinstance(flt.node, ast.And)

    def test_subexpression_order(self):
        """The bounding box comes before the date range and the attributes."""
        cql = create_filter("loc", 0, 0, 10, 10, "updatetime", T0, T1).cql
        assert cql.index("BBOX(loc") < cql.index("updatetime DURING") < cql.index("INCLUDE")

    def test_attributes_query_verbatim(self):
        """An attributes predicate replaces INCLUDE as given."""
        flt = create_filter("loc", 0, 0, 10, 10, "updatetime", T0, T1, "callsign = 'SAS1147'")
        assert flt.cql.endswith(" AND callsign = 'SAS1147'")
        assert "INCLUDE" not in flt.cql

    def test_bounds_not_validated(self):
        """Reversed corners are passed through unchanged."""
        flt = create_filter("loc", 10, 10, 0, 0, "updatetime", T0, T1)
        assert flt.cql.startswith("BBOX(loc, 10.0, 10.0, 0.0, 0.0)")

    def test_static_helper_on_fixture(self):
        """The fixture exposes the helper without an instance."""
        assert TrackFixture.create_filter("loc", 0, 0, 10, 10, "updatetime", T0, T1) == \
            create_filter("loc", 0, 0, 10, 10, "updatetime", T0, T1)

    @pytest.mark.parametrize("attributes", [
        "callsign = = 'x'",
        "AND",
        "callsign IN (",
    ])
    def test_malformed_attributes_query(self, attributes):
        """Fragments that break the grammar raise FilterSyntaxError."""
        with pytest.raises(FilterSyntaxError) as excinfo:
            create_filter("loc", 0, 0, 10, 10, "updatetime", T0, T1, attributes)
        assert attributes in excinfo.value.cql

    def test_malformed_field_name(self):
        """Field names containing grammar characters are rejected."""
        with pytest.raises(FilterSyntaxError):
            create_filter("loc)", 0, 0, 10, 10, "updatetime", T0, T1)


class TestFilterEvaluation:
    """Test suite for in-memory filter evaluation."""

    @pytest.fixture
    def records(self, tmp_path):
        # TRK000..TRK009, lon 18.00..18.09, lat 59.600..59.645, 10 s apart from 07:45:00
        return parse_track_csv(write_track_csv(tmp_path / "tracks.csv", generate_sample_rows(10)))

    def test_include_matches_everything(self, records):
        """INCLUDE keeps every record in order."""
        assert select_records(records, INCLUDE) == records
        assert all(evaluate_filter(INCLUDE, r) for r in records)
        assert INCLUDE.is_include

    def test_parsed_include(self, records):
        """Parsed INCLUDE and EXCLUDE behave like the constants."""
        assert select_records(records, parse_filter("INCLUDE")) == records
        assert select_records(records, parse_filter("EXCLUDE")) == ()

    def test_bbox_and_during(self, records):
        """Bounding box and exclusive time range select a subset."""
        flt = create_filter(
            "loc", 17.5, 59.0, 18.045, 60.0,
            "updatetime", "2017-06-12T07:45:05.000Z", "2017-06-12T07:46:00.000Z",
        )
        selected = select_records(records, flt)
        assert [r.fid for r in selected] == ["TRK001", "TRK002", "TRK003", "TRK004"]

    def test_during_is_exclusive(self, records):
        """Records exactly on the range limits are excluded."""
        flt = create_filter(
            "loc", 0, 0, 180, 90,
            "updatetime", "2017-06-12T07:45:00.000Z", "2017-06-12T07:45:30.000Z",
        )
        assert [r.fid for r in select_records(records, flt)] == ["TRK001", "TRK002"]

    def test_unsupported_predicate(self, records):
        """Predicates outside the supported set raise FilterEvaluationError."""
        flt = parse_filter("callsign = 'CS001'")
        with pytest.raises(FilterEvaluationError):
            evaluate_filter(flt, records[0])

    def test_parse_error(self):
        """Invalid text raises FilterSyntaxError."""
        with pytest.raises(FilterSyntaxError):
            parse_filter("BBOX(loc, 0, 0")


class TestQuery:
    """Test suite for queries."""

    def test_default_filter(self):
        """Queries default to INCLUDE."""
        assert Query("saab-quickstart").filter == INCLUDE

    def test_filter_equality_uses_text(self):
        """Filters compare by their ECQL text."""
        assert parse_filter("INCLUDE") == INCLUDE
        assert isinstance(INCLUDE, Filter)
