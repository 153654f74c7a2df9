"""Per-game configuration file manager"""

__version__ = "1.0.0"
