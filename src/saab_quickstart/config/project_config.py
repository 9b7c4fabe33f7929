"""
Project Configuration for the Saab track fixture
Centralized configuration management with environment variable support.
"""

import os
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict
import yaml
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

@dataclass
class FixtureConfig:
    """Track data resource configuration."""
    
    # Bundled resource, looked up inside the package data directory
    resource_package: str = "saab_quickstart.data"
    resource_name: str = "trackdata.csv"
    
    # Explicit file overriding the bundled resource
    resource_path: Optional[str] = None
    
    csv_encoding: str = "utf-8"

@dataclass
class LoggingConfig:
    """Logging configuration."""
    
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    main_logger: str = "saab_quickstart"

class ProjectConfig:
    """Main project configuration class."""
    
    def __init__(self, config_file: Optional[str] = None):
        """Initialize project configuration."""
        
        self.fixture = FixtureConfig()
        self.logging = LoggingConfig()
        
        # Load custom configuration if provided
        if config_file and os.path.exists(config_file):
            self.load_config_file(config_file)
        
        # Override with environment variables
        self.load_env_variables()
    
    def load_config_file(self, config_file: str) -> None:
        """Load configuration from YAML file."""
        with open(config_file, 'r') as f:
            config_data = yaml.safe_load(f) or {}
        
        # Update configuration objects with loaded data
        for section_name, section_data in config_data.items():
            if hasattr(self, section_name) and isinstance(section_data, dict):
                section_obj = getattr(self, section_name)
                for key, value in section_data.items():
                    if hasattr(section_obj, key):
                        setattr(section_obj, key, value)
    
    def load_env_variables(self) -> None:
        """Load configuration from environment variables."""

        def get_clean_env_var(key: str) -> Optional[str]:
            val = os.getenv(key)
            if val is not None:
                return val.split('#')[0].strip()
            return None

        # Track data resource
        trackdata_path = get_clean_env_var('SAAB_TRACKDATA_PATH')
        if trackdata_path:
            self.fixture.resource_path = trackdata_path
        
        encoding = get_clean_env_var('SAAB_CSV_ENCODING')
        if encoding:
            self.fixture.csv_encoding = encoding
        
        # Logging
        log_level_str = get_clean_env_var('SAAB_LOG_LEVEL')
        if log_level_str:
            self.logging.level = log_level_str.upper()
    
    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as nested dictionaries."""
        return {
            'fixture': asdict(self.fixture),
            'logging': asdict(self.logging)
        }
    
    def save_config(self, output_file: str) -> None:
        """Save current configuration to YAML file."""
        Path(output_file).parent.mkdir(parents=True, exist_ok=True)
        with open(output_file, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2)

# Global configuration instance, created on first use
_config: Optional[ProjectConfig] = None

def get_config() -> ProjectConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ProjectConfig(os.getenv('SAAB_CONFIG_FILE'))
    return _config

def update_config(config_file: str) -> None:
    """Update global configuration from file."""
    global _config
    _config = ProjectConfig(config_file)

def reset_config() -> None:
    """Drop the global configuration so the next access reloads it."""
    global _config
    _config = None
