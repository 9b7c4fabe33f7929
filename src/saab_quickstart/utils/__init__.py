"""
Utility modules for track data processing
"""

from .geometry_utils import GeometryUtils
from .crs_utils import CRSUtils
from .logging_utils import setup_logging

__all__ = ['GeometryUtils', 'CRSUtils', 'setup_logging']
