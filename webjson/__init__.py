"""WebJson - Use templates to convert JSON data to webpages.

A small static-site generator: JSON page descriptors are rendered through
named HTML templates and includes, everything else is mirrored verbatim.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

# Re-export main CLI entry point
from .cli import main

__all__ = ["main"]
