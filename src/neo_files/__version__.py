"""Version information for neo-files."""

__version__ = "1.0.0"
