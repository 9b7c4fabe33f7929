"""Test fixtures for track fixture testing"""

from .sample_track_data import SAMPLE_ROWS, generate_sample_rows, write_track_csv

__all__ = [
    'SAMPLE_ROWS',
    'generate_sample_rows',
    'write_track_csv'
]
