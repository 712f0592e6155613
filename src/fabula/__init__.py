"""fabula - meta-command runtime for text-driven narratives."""

__version__ = "0.1.0"
