"""Version information for modelmux."""

__version__ = "0.1.0"
