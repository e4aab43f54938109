"""webstarter - generate front-end projects from starter templates."""

__version__ = "0.1.0"
