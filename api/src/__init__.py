"""FastAPI companion service for the FastAPI tutorial.

This package implements the endpoints the tutorial walks through:
hello world, path and query parameters, request bodies, async endpoints
and middleware.
"""

__version__ = "0.1.0"
