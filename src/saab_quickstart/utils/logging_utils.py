"""
Logging helpers for library users and example runners.
"""

import logging
from typing import Optional

from ..config.project_config import LoggingConfig, get_config

_HANDLER_NAME = "saab_quickstart.console"

def setup_logging(config: Optional[LoggingConfig] = None) -> logging.Logger:
    """
    Attach a console handler to the package logger.
    
    Calling this more than once replaces the level and format of the
    existing handler instead of adding another one.
    """
    config = config or get_config().logging
    logger = logging.getLogger(config.main_logger)
    logger.setLevel(config.level)
    
    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)
    handler.setFormatter(logging.Formatter(config.format))
    
    return logger
