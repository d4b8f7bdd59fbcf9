"""Falling Blocks: a single-player falling-block puzzle game."""

__version__ = "0.1.0"
