import logging

__version__ = "0.1.0"

# Create a logger instance
logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)

# Create a console handler
handler = logging.StreamHandler()

# Create a formatter and set it for the handler
formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
handler.setFormatter(formatter)

# Add the handler to the logger
logger.addHandler(handler)


def set_log_level(level) -> None:
    """Set the package logger level from a name ('DEBUG') or a logging constant."""
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: '{level}'")
        level = resolved
    logger.setLevel(level)
