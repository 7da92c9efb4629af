"""
API routes package for DocCompare.
"""
from api.routes import comparison

__all__ = ["comparison"]
