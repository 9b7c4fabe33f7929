"""
ECQL filters and queries over track records.

Filters are composed as ECQL text and parsed with pygeofilter, so every
``Filter`` carries both its text and the parsed expression tree. A small
in-memory evaluator covers the predicates used by the track fixture
(INCLUDE/EXCLUDE, AND/OR/NOT, BBOX and DURING).
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional, Tuple

from lark.exceptions import LarkError
from pygeofilter import ast
from pygeofilter.parsers.ecql import parse as parse_ecql
from shapely.geometry import Point, box
from shapely.geometry.base import BaseGeometry

from .exceptions.validation_errors import FilterEvaluationError, FilterSyntaxError
from .utils.geometry_utils import GeometryUtils

logger = logging.getLogger(__name__)

INCLUDE_TOKEN = "INCLUDE"


@dataclass(frozen=True)
class Filter:
    """A parsed ECQL predicate together with its source text."""
    cql: str
    node: Any = field(compare=False, repr=False)

    def __str__(self) -> str:
        return self.cql

    @property
    def is_include(self) -> bool:
        return isinstance(self.node, ast.Include) and not getattr(self.node, 'not_', False)


# Matches every record
INCLUDE = Filter(INCLUDE_TOKEN, ast.Include(False))


@dataclass(frozen=True)
class Query:
    """A filter against one feature type."""
    type_name: str
    filter: Filter = INCLUDE


def parse_filter(cql: str) -> Filter:
    """
    Parse ECQL text into a ``Filter``.

    Raises:
    -------
    FilterSyntaxError
        If the text is not accepted by the ECQL grammar
    """
    try:
        node = parse_ecql(cql)
    except (LarkError, ValueError) as exc:
        raise FilterSyntaxError(f"Invalid ECQL filter '{cql}': {exc}", cql=cql) from exc
    return Filter(cql, node)


def _format_number(value: float) -> str:
    return repr(float(value))


def create_filter(geom_field: str, x0: float, y0: float, x1: float, y1: float,
                  date_field: str, t0: str, t1: str,
                  attributes_query: Optional[str] = None) -> Filter:
    """
    Create a filter from a bounding box, a date range and optional attributes.

    Parameters:
    -----------
    geom_field : str
        Geometry attribute name
    x0, y0 : float
        Bounding box minimum x (longitude) and y (latitude)
    x1, y1 : float
        Bounding box maximum x (longitude) and y (latitude)
    date_field : str
        Date attribute name
    t0, t1 : str
        Exclusive time range bounds, formatted ``yyyy-MM-dd'T'HH:mm:ss.SSSZ``
    attributes_query : str, optional
        Additional ECQL predicate; ``INCLUDE`` when omitted

    Returns:
    --------
    Filter
        ``BBOX(...) AND (date DURING t0/t1) AND attributes``

    Raises:
    -------
    FilterSyntaxError
        If the composed text cannot be parsed
    """
    # Corner ordering is not checked here; the filter grammar decides
    cql_geometry = (
        f"BBOX({geom_field}, {_format_number(x0)}, {_format_number(y0)}, "
        f"{_format_number(x1)}, {_format_number(y1)})"
    )
    cql_dates = f"({date_field} DURING {t0}/{t1})"
    cql_attributes = INCLUDE_TOKEN if attributes_query is None else attributes_query

    return parse_filter(f"{cql_geometry} AND {cql_dates} AND {cql_attributes}")


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _interval_bounds(period) -> Tuple[datetime, datetime]:
    if hasattr(period, 'start') and hasattr(period, 'end'):
        start, end = period.start, period.end
    else:
        start, end = period
    if isinstance(start, timedelta):
        start = end - start
    if isinstance(end, timedelta):
        end = start + end
    return _as_utc(start), _as_utc(end)


def _resolve(node, record) -> Any:
    if isinstance(node, ast.Attribute):
        return record.get_attribute(node.name)
    return node


def evaluate_filter(flt, record) -> bool:
    """
    Evaluate a filter (or a raw pygeofilter node) against one record.

    Raises:
    -------
    FilterEvaluationError
        If the filter contains a predicate this evaluator does not support
    """
    node = flt.node if isinstance(flt, Filter) else flt

    if isinstance(node, ast.Include):
        return not getattr(node, 'not_', False)
    if isinstance(node, ast.And):
        return evaluate_filter(node.lhs, record) and evaluate_filter(node.rhs, record)
    if isinstance(node, ast.Or):
        return evaluate_filter(node.lhs, record) or evaluate_filter(node.rhs, record)
    if isinstance(node, ast.Not):
        return not evaluate_filter(node.sub_node, record)

    if isinstance(node, ast.BBox):
        geometry = _resolve(node.lhs, record)
        if isinstance(geometry, Point):
            return GeometryUtils.point_in_bbox(geometry, node.minx, node.miny, node.maxx, node.maxy)
        if isinstance(geometry, BaseGeometry):
            return box(node.minx, node.miny, node.maxx, node.maxy).intersects(geometry)
        return False

    if isinstance(node, ast.TimeDuring):
        value = _resolve(node.lhs, record)
        if not isinstance(value, datetime):
            return False
        start, end = _interval_bounds(node.rhs)
        return start < _as_utc(value) < end

    raise FilterEvaluationError(
        f"Unsupported filter node: {type(node).__name__}", node=node
    )


def select_records(records: Iterable, flt: Filter) -> Tuple:
    """Return the records matching ``flt``, preserving their order."""
    if flt.is_include:
        return tuple(records)
    return tuple(record for record in records if evaluate_filter(flt, record))
