"""
Core module for Sunburst Viz.

Contains configuration and formatting utilities.
"""

from sunburst_viz.core.config import *
from sunburst_viz.core.utils import format_value, format_percent, validate_columns

__all__ = [
    'SunburstConfig',
    'format_value',
    'format_percent',
    'validate_columns',
]
