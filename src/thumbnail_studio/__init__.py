"""AI YouTube thumbnail generator: terminal front-end."""

__version__ = "0.1.0"
