"""Content Publisher - commits admin-edited site content to a GitHub repository."""

__version__ = "0.1.0"
