"""Build Mockoon environment files from typed definition trees."""

__version__ = "1.0.0"
