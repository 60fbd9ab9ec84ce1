"""hexpipes - a procedurally generated hex pipe-rotation puzzle."""

__version__ = "0.1.0"
