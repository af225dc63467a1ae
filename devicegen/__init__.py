"""devicegen -- scaffolding generator for new device services."""

__version__ = "0.1.0"
