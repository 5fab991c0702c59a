"""Content resolution layer for the hotel website's headless CMS."""

__version__ = "0.1.0"
