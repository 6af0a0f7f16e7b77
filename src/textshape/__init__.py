"""textshape - turn unstructured text into validated structured data."""

__version__ = "0.1.0"
