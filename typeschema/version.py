"""Version information for typeschema."""

__version__ = "0.4.0"
