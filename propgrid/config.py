"""
Framework configuration for the property grid core.

This module holds the small set of knobs that change how instances are
introspected and how editors behave. Values are read once from the
environment when the configuration object is created:

    PROPGRID_DEFAULT_CATEGORY   Category used when a property declares none
    PROPGRID_CASCADE_SEPARATOR  Separator between cascade levels in the committed value
    PROPGRID_INCLUDE_PRIVATE    Show attributes whose name starts with an underscore
    PROPGRID_LOG_NOTIFICATIONS  Debug-log every change notification emitted by entries

You normally never touch this; tests call reset_grid_config() after patching
the environment.
"""

from dataclasses import dataclass
import os


_TRUTHY = ('1', 'true', 'yes')


@dataclass
class GridConfig:
    """
    Global configuration for the property grid framework.

    Separate from any application config: this only controls how the grid
    core discovers and edits properties.
    """

    default_category: str = "Misc"
    cascade_separator: str = "/"

    # Attributes named _foo are hidden unless this is set
    include_private: bool = False

    # DEBUGGING: log every property_changed emission at DEBUG level
    log_notifications: bool = False

    def __post_init__(self):
        """Initialize from environment variables if set."""
        category = os.getenv('PROPGRID_DEFAULT_CATEGORY', '').strip()
        if category:
            self.default_category = category

        separator = os.getenv('PROPGRID_CASCADE_SEPARATOR', '')
        if separator.strip():
            self.cascade_separator = separator.strip()

        if os.getenv('PROPGRID_INCLUDE_PRIVATE', '').lower() in _TRUTHY:
            self.include_private = True
        if os.getenv('PROPGRID_LOG_NOTIFICATIONS', '').lower() in _TRUTHY:
            self.log_notifications = True


# Global framework configuration instance
_grid_config: GridConfig = GridConfig()


def get_grid_config() -> GridConfig:
    """
    Get the global grid configuration.

    Example:
        >>> from propgrid.config import get_grid_config
        >>> get_grid_config().default_category
        'Misc'
    """
    return _grid_config


def reset_grid_config() -> GridConfig:
    """Re-read the environment and replace the global configuration."""
    global _grid_config
    _grid_config = GridConfig()
    return _grid_config
