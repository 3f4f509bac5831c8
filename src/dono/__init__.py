"""Dono: records what has been played and serves it to companion displays."""

__version__ = "0.1.0"
