"""Acceleration runtime core: sessions, resources, a plugin registry and operation dispatch."""

__version__ = "0.1.0"