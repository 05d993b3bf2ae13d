"""Wedding Run - a side-scrolling endless runner for event kiosks."""

__version__ = "0.1.0"
