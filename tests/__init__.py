"""
Sunburst Viz Test Suite

This package contains unit tests and fixtures for the Sunburst Viz
engine and its command-line entry point.

Run tests with:
    pytest tests/
    pytest tests/test_hierarchy.py -v
    pytest tests/test_interaction.py::TestPointerEnter -v
"""

__version__ = "1.0.0"
