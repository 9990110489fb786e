"""Space grid game — turn-resolution engine and terminal front-end."""

__version__ = "0.1.0"
