"""
Feature type definitions for track records.
Parses attribute specification strings into immutable schemas.
"""

import re
import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

import pyproj

from .exceptions.validation_errors import SchemaError
from .utils.crs_utils import CRSUtils

logger = logging.getLogger(__name__)

# User-data key naming the attribute used for temporal indexing
DEFAULT_DATE_KEY = "geomesa.index.dtg"

TRACK_TYPE_NAME = "saab-quickstart"

# "*" marks the default geometry, used for spatial indexing
TRACK_TYPE_SPEC = (
    "trackid:String:index=true,"
    "callsign:String,"
    "updatetime:Date,"
    "*loc:Point:srid=4326"
)

GEOMETRY_BINDINGS = frozenset({
    "Point", "LineString", "Polygon", "MultiPoint",
    "MultiLineString", "MultiPolygon", "Geometry"
})
SCALAR_BINDINGS = frozenset({
    "String", "Integer", "Long", "Float", "Double", "Boolean", "Date", "UUID"
})

DEFAULT_SRID = 4326

_NAME_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"false", "0", "no"}


@dataclass(frozen=True)
class AttributeDescriptor:
    """A single named, typed attribute of a feature type."""
    name: str
    binding: str
    indexed: bool = False
    srid: Optional[int] = None
    default: bool = False

    @property
    def is_geometry(self) -> bool:
        return self.binding in GEOMETRY_BINDINGS

    @property
    def is_temporal(self) -> bool:
        return self.binding == "Date"

    @property
    def crs(self) -> Optional[pyproj.CRS]:
        """Coordinate reference system of a geometry attribute."""
        if not self.is_geometry or self.srid is None:
            return None
        return CRSUtils.crs_from_srid(self.srid)

    def to_spec(self) -> str:
        parts = [("*" if self.default else "") + self.name, self.binding]
        if self.indexed:
            parts.append("index=true")
        if self.is_geometry and self.srid is not None:
            parts.append(f"srid={self.srid}")
        return ":".join(parts)


@dataclass(frozen=True)
class FeatureSchema:
    """
    Ordered, immutable set of attribute descriptors for one feature type.

    ``user_data`` carries indexing hints such as the default date
    attribute (see ``DEFAULT_DATE_KEY``).
    """
    type_name: str
    attributes: Tuple[AttributeDescriptor, ...]
    user_data: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __len__(self) -> int:
        return len(self.attributes)

    def __iter__(self) -> Iterator[AttributeDescriptor]:
        return iter(self.attributes)

    @property
    def attribute_names(self) -> Tuple[str, ...]:
        return tuple(attr.name for attr in self.attributes)

    def get_descriptor(self, name: str) -> AttributeDescriptor:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        raise KeyError(f"No attribute '{name}' in feature type '{self.type_name}'")

    @property
    def default_geometry(self) -> Optional[AttributeDescriptor]:
        """The attribute flagged with ``*``, else the first geometry attribute."""
        geometries = [attr for attr in self.attributes if attr.is_geometry]
        for attr in geometries:
            if attr.default:
                return attr
        return geometries[0] if geometries else None

    @property
    def default_date(self) -> Optional[AttributeDescriptor]:
        """The attribute named in user data, else the first date attribute."""
        name = self.user_data.get(DEFAULT_DATE_KEY)
        if name is not None:
            return self.get_descriptor(name)
        dates = [attr for attr in self.attributes if attr.is_temporal]
        return dates[0] if dates else None

    def to_spec(self) -> str:
        return ",".join(attr.to_spec() for attr in self.attributes)


def _parse_flag(value: str, option: str, spec: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise SchemaError(f"Invalid boolean '{value}' for option '{option}'", spec=spec)


def _parse_attribute(part: str, spec: str) -> Tuple[AttributeDescriptor, bool]:
    """Parse ``[*]name:Type[:option=value...]``; also returns the default-date flag."""
    text = part.strip()
    default = text.startswith("*")
    if default:
        text = text[1:]

    tokens = [token.strip() for token in text.split(":")]
    if len(tokens) < 2 or not tokens[1]:
        raise SchemaError(f"Attribute '{part}' is missing a type", spec=spec)

    name, binding = tokens[0], tokens[1]
    if not _NAME_PATTERN.match(name):
        raise SchemaError(f"Invalid attribute name '{name}'", spec=spec)
    if binding not in GEOMETRY_BINDINGS and binding not in SCALAR_BINDINGS:
        raise SchemaError(f"Unknown type '{binding}' for attribute '{name}'", spec=spec)

    is_geometry = binding in GEOMETRY_BINDINGS
    if default and not is_geometry:
        raise SchemaError(f"Only geometry attributes can be the default geometry: '{name}'", spec=spec)

    indexed = False
    srid = DEFAULT_SRID if is_geometry else None
    default_date = False

    for option in tokens[2:]:
        key, sep, value = option.partition("=")
        key = key.strip()
        if not sep:
            raise SchemaError(f"Malformed option '{option}' for attribute '{name}'", spec=spec)
        if key == "index":
            indexed = _parse_flag(value, key, spec)
        elif key == "srid":
            if not is_geometry:
                raise SchemaError(f"Option 'srid' is only valid for geometries: '{name}'", spec=spec)
            try:
                srid = int(value)
            except ValueError:
                raise SchemaError(f"Invalid srid '{value}' for attribute '{name}'", spec=spec)
        elif key == "default":
            flag = _parse_flag(value, key, spec)
            if is_geometry:
                default = default or flag
            elif binding == "Date":
                default_date = flag
            else:
                raise SchemaError(f"Option 'default' is not valid for type '{binding}'", spec=spec)
        else:
            logger.debug(f"Ignoring unsupported option '{key}' on attribute '{name}'")

    descriptor = AttributeDescriptor(
        name=name,
        binding=binding,
        indexed=indexed,
        srid=srid,
        default=default,
    )
    return descriptor, default_date


def parse_type_spec(type_name: str, spec: str,
                    user_data: Optional[Dict[str, str]] = None) -> FeatureSchema:
    """
    Create a feature schema from an attribute specification string.

    Parameters:
    -----------
    type_name : str
        Name of the feature type
    spec : str
        Comma separated attributes, e.g. ``"name:String:index=true,*geom:Point:srid=4326"``
    user_data : dict, optional
        Indexing hints stored with the schema

    Returns:
    --------
    FeatureSchema
        Immutable schema with attributes in declaration order
    """
    if not type_name:
        raise SchemaError("Feature type name must not be empty", spec=spec)

    attributes = []
    default_dates = []
    for part in spec.split(","):
        if not part.strip():
            raise SchemaError("Empty attribute in specification", spec=spec)
        descriptor, default_date = _parse_attribute(part, spec)
        attributes.append(descriptor)
        if default_date:
            default_dates.append(descriptor.name)

    names = [attr.name for attr in attributes]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise SchemaError(f"Duplicate attributes: {duplicates}", spec=spec)
    if sum(1 for attr in attributes if attr.default) > 1:
        raise SchemaError("More than one default geometry", spec=spec)
    if len(default_dates) > 1:
        raise SchemaError(f"More than one default date: {default_dates}", spec=spec)

    data = dict(user_data or {})
    if default_dates:
        data.setdefault(DEFAULT_DATE_KEY, default_dates[0])

    dtg = data.get(DEFAULT_DATE_KEY)
    if dtg is not None:
        dtg_attr = next((attr for attr in attributes if attr.name == dtg), None)
        if dtg_attr is None or not dtg_attr.is_temporal:
            raise SchemaError(f"Default date '{dtg}' is not a Date attribute", spec=spec)

    return FeatureSchema(
        type_name=type_name,
        attributes=tuple(attributes),
        user_data=MappingProxyType(data),
    )


def build_track_schema(type_name: str = TRACK_TYPE_NAME) -> FeatureSchema:
    """Build the four-attribute track schema with ``updatetime`` as default date."""
    return parse_type_spec(
        type_name,
        TRACK_TYPE_SPEC,
        user_data={DEFAULT_DATE_KEY: "updatetime"},
    )
