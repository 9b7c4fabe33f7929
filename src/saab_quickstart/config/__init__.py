"""
Configuration for the Saab track fixture
"""

from .project_config import (
    FixtureConfig, LoggingConfig, ProjectConfig,
    get_config, update_config, reset_config
)

__all__ = [
    'FixtureConfig',
    'LoggingConfig',
    'ProjectConfig',
    'get_config',
    'update_config',
    'reset_config'
]
