"""
Coordinate Reference System utilities.
Resolves spatial reference identifiers for geometry attributes.
"""

from functools import lru_cache

import pyproj
import logging

logger = logging.getLogger(__name__)

class CRSUtils:
    """Coordinate Reference System utilities."""
    
    @staticmethod
    @lru_cache(maxsize=None)
    def crs_from_srid(srid: int) -> pyproj.CRS:
        """
        Resolve an EPSG spatial reference identifier.
        
        Parameters:
        -----------
        srid : int
            EPSG code, e.g. 4326
            
        Returns:
        --------
        pyproj.CRS
            Coordinate reference system for the code
        """
        return pyproj.CRS.from_epsg(int(srid))
    
