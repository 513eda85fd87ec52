"""A grid-based city driving game with taxi and delivery modes, drawn with pygame."""

__version__ = "0.1.0"