"""Rhythm-paddle game on a modelled seven-segment display, with an unattended simulator."""

__version__ = "0.1.0"