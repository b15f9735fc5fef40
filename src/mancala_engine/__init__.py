"""Kalah game engine with alpha-beta search."""

__version__ = "0.1.0"
