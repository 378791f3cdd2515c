"""Daily journaling and multi-day task management backed by markdown files."""

__version__ = "0.1.0"