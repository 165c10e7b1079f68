"""tunebook — song and playlist backend for musicians."""

__version__ = "0.1.0"
