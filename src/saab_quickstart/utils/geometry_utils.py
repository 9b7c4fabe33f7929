"""
Geometric helpers for track records.
Builds WKT points and evaluates bounding-box containment.
"""

from shapely.geometry import Point
from shapely import wkt
import logging

logger = logging.getLogger(__name__)

class GeometryUtils:
    """Geometric operations for track record locations."""
    
    @staticmethod
    def point_to_wkt(longitude: float, latitude: float) -> str:
        """
        Encode a location as well-known text.
        
        Parameters:
        -----------
        longitude : float
            Longitude in decimal degrees
        latitude : float
            Latitude in decimal degrees
            
        Returns:
        --------
        str
            ``POINT (<longitude> <latitude>)``, longitude first
        """
        return f"POINT ({float(longitude)!r} {float(latitude)!r})"
    
    @staticmethod
    def make_point(longitude: float, latitude: float) -> Point:
        """Create a point geometry from longitude/latitude (x/y) ordering."""
        return wkt.loads(GeometryUtils.point_to_wkt(longitude, latitude))
    
    @staticmethod
    def point_in_bbox(point: Point, x0: float, y0: float, x1: float, y1: float) -> bool:
        """
        Test whether a point lies within a bounding box.
        
        The box boundary counts as inside. Corners may be given in any
        order; the box spans the min and max of each axis.
        
        Parameters:
        -----------
        point : Point
            Point geometry to test
        x0, y0 : float
            First corner (longitude, latitude)
        x1, y1 : float
            Second corner (longitude, latitude)
            
        Returns:
        --------
        bool
            True if the point is covered by the box
        """
        if point is None or point.is_empty:
            return False
        min_x, max_x = min(x0, x1), max(x0, x1)
        min_y, max_y = min(y0, y1), max(y0, y1)
        return min_x <= point.x <= max_x and min_y <= point.y <= max_y
