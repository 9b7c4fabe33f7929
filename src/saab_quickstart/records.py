"""
Typed track records and conversion to GeoPandas.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import pandas as pd
import geopandas as gpd
from shapely.geometry import Point

from .schema import FeatureSchema, build_track_schema


@dataclass(frozen=True)
class TrackRecord:
    """
    One track observation conforming to the track schema.

    ``fid`` is the externally visible identifier; for CSV-loaded records it
    is the ``trackid`` value. ``updatetime`` is timezone-aware UTC and ``loc``
    is a point in longitude/latitude order.
    """
    fid: str
    trackid: str
    callsign: str
    updatetime: datetime
    loc: Point

    @property
    def wkt(self) -> str:
        return self.loc.wkt

    @property
    def attributes(self) -> Dict[str, Any]:
        return {
            'trackid': self.trackid,
            'callsign': self.callsign,
            'updatetime': self.updatetime,
            'loc': self.loc,
        }

    def get_attribute(self, name: str) -> Any:
        try:
            return self.attributes[name]
        except KeyError:
            raise KeyError(f"Track record has no attribute '{name}'") from None


def records_to_geodataframe(records: Sequence[TrackRecord],
                            schema: Optional[FeatureSchema] = None) -> gpd.GeoDataFrame:
    """
    Convert track records to a GeoDataFrame indexed by feature id.

    Parameters:
    -----------
    records : Sequence[TrackRecord]
        Records in the order they should appear
    schema : FeatureSchema, optional
        Schema supplying the geometry column name and CRS

    Returns:
    --------
    gpd.GeoDataFrame
        One row per record; the geometry column is named after the
        schema's default geometry attribute
    """
    schema = schema or build_track_schema()
    geom_attr = schema.default_geometry

    index = pd.Index([record.fid for record in records], name='fid', dtype=object)
    frame = pd.DataFrame(
        {
            'trackid': [record.trackid for record in records],
            'callsign': [record.callsign for record in records],
            'updatetime': pd.to_datetime([record.updatetime for record in records], utc=True),
        },
        index=index,
    )
    geometry = gpd.GeoSeries(
        [record.loc for record in records],
        index=index,
        crs=geom_attr.crs,
    )

    gdf = gpd.GeoDataFrame(frame, geometry=geometry)
    return gdf.rename_geometry(geom_attr.name)
