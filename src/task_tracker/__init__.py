"""In-memory task tracker with dependency-aware completion rules."""

__version__ = "0.1.0"
