"""SSL Labs API Checker - run SSL/TLS assessments from the command line."""

__version__ = "1.0.0"

from .main import main

__all__ = ["main", "__version__"]
