"""neofit: local fitness tracking core with body metrics and avatar scaling."""

__version__ = "0.1.0"
