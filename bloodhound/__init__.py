"""Score and sort URLs by rules applied to their names and HTML content."""

__version__ = "0.1.0"