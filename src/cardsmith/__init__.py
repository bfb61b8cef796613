"""Cardsmith - card layout designer and formatted text renderer."""

__version__ = "0.1.0"
