"""Helper utilities for the n-gram drill application.

This package contains small utilities shared by the web app and the
command line entry point.
"""

# Make the logging setup available at the package level
from .log_util import configure_logging  # noqa: F401
